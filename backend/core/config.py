import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKENDS = {"memory", "database"}
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mentorconnect.db")
SEED_DEMO_DATA = _get_bool(os.getenv("SEED_DEMO_DATA"), default=True)

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:5173"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-mentorconnect-dev-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

# Placeholder until reviews exist; not derived from session data.
DASHBOARD_AVERAGE_RATING = float(os.getenv("DASHBOARD_AVERAGE_RATING", "4.8"))


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me-mentorconnect-dev-secret":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if STORAGE_BACKEND not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {sorted(STORAGE_BACKENDS)}.")
