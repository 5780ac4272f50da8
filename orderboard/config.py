
import warnings
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True
    }

    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_PUBLISHABLE_KEY = os.getenv("STRIPE_PUBLISHABLE_KEY")
    PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "eur")

    # Kitchen board refresh, in seconds
    POLL_INTERVAL_SECONDS = int(os.getenv("POLL_INTERVAL_SECONDS", "5"))

    # pending -> ready without passing through preparing
    ALLOW_SKIP_PREPARING = _env_bool("ALLOW_SKIP_PREPARING", True)
    # "reject" or "correct"
    TOTAL_MISMATCH_POLICY = os.getenv("TOTAL_MISMATCH_POLICY", "reject")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    if not SQLALCHEMY_DATABASE_URI:
        warnings.warn(
            "DATABASE_URL is not set. Falling back to local SQLite (sqlite:///local.db).",
            RuntimeWarning
        )
        SQLALCHEMY_DATABASE_URI = "sqlite:///local.db"
