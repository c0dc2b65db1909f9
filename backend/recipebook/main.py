# main.py
# FastAPI app setup and router wiring
# Routers are split per concern; each declares its own prefix

from __future__ import annotations

import logging
from asyncio import sleep
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipebook.api.routes_recipes import router as recipes_router
from recipebook.api.routes_reviews import router as reviews_router
from recipebook.api.routes_users import router as users_router
from recipebook.core.config import settings
from recipebook.core.errors import RecipeBookError, ValidationError
from recipebook.db.init import get_db, init_db, close_db
from recipebook.db.indexes import ensure_indexes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("recipebook")

app = FastAPI(title="Recipe Book - API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RecipeBookError)
async def recipe_book_error_handler(request: Request, exc: RecipeBookError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # bodies or query values of the wrong shape get the same 400 envelope
    log.info("malformed request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=ValidationError.status_code, content={"error": "Malformed fields"})

@app.on_event("startup")
async def on_startup() -> None:
    # 1) connect first (bounded retries, 1s apart)
    db = None
    for i in range(settings.DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")
        return

    # 2) indexes
    try:
        await ensure_indexes(db)
        log.info("[startup] indexes ensured")
    except Exception:
        log.exception("[startup] ensure_indexes failed")

@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception:
        log.exception("health check ping failed")
        ok["db"] = "error"
    return ok

app.include_router(recipes_router)
app.include_router(reviews_router)
app.include_router(users_router)
