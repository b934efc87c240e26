import os
from dotenv import load_dotenv

from validation import DEFAULT_DISALLOWED_TERMS

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _split_terms(raw):
    return [t.strip() for t in raw.split(",") if t.strip()]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # DATABASE_URL wins (Postgres in production); local dev falls back to SQLite
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "blog.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    TITLE_MAX_LENGTH = int(os.getenv("TITLE_MAX_LENGTH", "25"))
    BODY_MAX_LENGTH = int(os.getenv("BODY_MAX_LENGTH", "255"))

    # Comma separated extra terms for the clean-content check
    DISALLOWED_TERMS = list(DEFAULT_DISALLOWED_TERMS) + _split_terms(
        os.getenv("DISALLOWED_TERMS", "")
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    TITLE_MAX_LENGTH = 25
    BODY_MAX_LENGTH = 255
    DISALLOWED_TERMS = ["darn", "heck"]
    LOG_LEVEL = "DEBUG"
