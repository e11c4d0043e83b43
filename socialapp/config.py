import os
from datetime import timedelta

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str):
    raw = os.getenv(name, default).strip()
    return [item.strip() for item in raw.split(",") if item.strip()]


AVATAR_COLORS = ("#fda4af", "#a78bfa", "#60a5fa", "#fde68a", "#bbf7d0")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///social.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev_secret_change_me")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        days=int(os.getenv("JWT_EXPIRES_DAYS", "30"))
    )
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ERROR_MESSAGE_KEY = "error"

    CORS_ALLOWED_ORIGINS = _env_list("CORS_ALLOWED_ORIGINS", "*")

    # Notify users about their own likes and comments.
    NOTIFY_SELF_ACTIONS = _env_bool("NOTIFY_SELF_ACTIONS", True)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE", "").strip() or None

    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "4000"))
