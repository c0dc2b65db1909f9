# services/users.py
# Sign-up / login. Hashing (bcrypt) and token signing (itsdangerous) are
# off-the-shelf; tokens are short-lived and carry {user_id, email}.

from __future__ import annotations
import logging
from typing import Any, Dict

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pymongo.errors import DuplicateKeyError

from recipebook.core.config import settings
from recipebook.core.errors import AuthError, ValidationError
from recipebook.db.models.schemas import UserIn
from recipebook.services.utils import missing_fields, store_errors

log = logging.getLogger(__name__)

_TOKEN_SALT = "access-token"

def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.TOKEN_SECRET, salt=_TOKEN_SALT)

def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(settings.BCRYPT_ROUNDS)).decode()

def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())

def generate_access_token(user_id: str, email: str) -> str:
    return _serializer().dumps({"user_id": user_id, "email": email})

def read_access_token(token: str) -> Dict[str, Any]:
    """Return the token payload; raises AuthError if tampered or expired."""
    try:
        return _serializer().loads(token, max_age=settings.TOKEN_TTL_SECONDS)
    except SignatureExpired:
        raise AuthError("Token expired")
    except BadSignature:
        raise AuthError("Invalid token")

async def create_user(db, payload: UserIn) -> str:
    if missing_fields(payload.model_dump(), ("email", "password")):
        raise ValidationError("Please provide email and password")

    email = payload.email.strip().lower()
    doc = {"email": email, "password": hash_password(payload.password)}
    with store_errors("create user"):
        existing = await db["users"].find_one({"email": email}, {"_id": 1})
        if existing:
            raise ValidationError("Email already registered")
        try:
            result = await db["users"].insert_one(doc)
        except DuplicateKeyError:
            # concurrent sign-up with the same email won the unique index
            raise ValidationError("Email already registered")
    log.info("created user id=%s", result.inserted_id)
    return str(result.inserted_id)

async def authenticate(db, payload: UserIn) -> str:
    if missing_fields(payload.model_dump(), ("email", "password")):
        raise ValidationError("Please provide email and password")

    email = payload.email.strip().lower()
    with store_errors("login"):
        user = await db["users"].find_one({"email": email})
    if not user or not verify_password(payload.password, user["password"]):
        log.info("login failed for %s", email)
        raise AuthError()
    return generate_access_token(str(user["_id"]), user["email"])
