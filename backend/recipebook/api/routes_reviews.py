# api/routes_reviews.py
# Reviews nested under a recipe

from fastapi import APIRouter, Depends

from recipebook.db.init import get_db
from recipebook.db.models.schemas import ReviewIn
from recipebook.services.reviews import add_review, delete_review, update_review

router = APIRouter(prefix="/recipes/{recipe_id}/reviews", tags=["reviews"])

@router.post("", status_code=201)
async def post_review(recipe_id: str, payload: ReviewIn, db=Depends(get_db)):
    review_id = await add_review(db, recipe_id, payload)
    return {"message": "Review added successfully", "reviewId": review_id}

@router.put("/{review_id}")
async def put_review(recipe_id: str, review_id: str, payload: ReviewIn, db=Depends(get_db)):
    await update_review(db, recipe_id, review_id, payload)
    return {"message": "Review updated successfully", "reviewId": review_id}

@router.delete("/{review_id}")
async def remove_review(recipe_id: str, review_id: str, db=Depends(get_db)):
    await delete_review(db, recipe_id, review_id)
    return {"message": "Review deleted successfully"}
