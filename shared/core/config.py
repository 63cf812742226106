import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # DATABASE_URL wins over the individual DB_* parts
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST", "localhost")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    DB_NAME: str | None = os.getenv("DB_NAME", "property_manager")

    # conditional-update attempts before an allocation gives up
    ALLOCATION_MAX_RETRIES: int = int(os.getenv("ALLOCATION_MAX_RETRIES", 5))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8002")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def build_database_url(config: Settings) -> str:
    if config.DATABASE_URL:
        return config.DATABASE_URL
    return (
        f"postgresql+psycopg2://{config.DB_USER}:{config.DB_PASS}@{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"
    )


DATABASE_URL = build_database_url(settings)
