# Environment-driven settings (.env)
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # prod/staging are set through env
    MONGO_DB: str = "recipe_book"
    DB_INIT_RETRIES: int = 20

    TOKEN_SECRET: str = "change-me"
    TOKEN_TTL_SECONDS: int = 60 * 60  # 1h
    BCRYPT_ROUNDS: int = 12

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
