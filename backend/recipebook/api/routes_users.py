# api/routes_users.py
# Sign-up, login, profile

from fastapi import APIRouter, Depends

from recipebook.core.deps import get_current_user
from recipebook.db.init import get_db
from recipebook.db.models.schemas import UserIn
from recipebook.services.users import authenticate, create_user

router = APIRouter(tags=["users"])

@router.post("/users", status_code=201)
async def sign_up(payload: UserIn, db=Depends(get_db)):
    user_id = await create_user(db, payload)
    return {"message": "New user account has been created", "userId": user_id}

@router.post("/login")
async def login(payload: UserIn, db=Depends(get_db)):
    token = await authenticate(db, payload)
    return {"accessToken": token}

@router.get("/profile")
async def profile(user: dict = Depends(get_current_user)):
    return {"user": user}
