import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Locales
    SUPPORTED_LOCALES = ("es-CO", "es-DO", "en")
    DEFAULT_LOCALE = "es-CO"

    # Media
    UPLOAD_ROOT = os.getenv("UPLOAD_ROOT", os.path.join(os.getcwd(), "public"))
    MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))
    ALLOWED_MIME_TYPES = _env_list(
        "ALLOWED_MIME_TYPES",
        "image/png,image/jpeg,image/jpg,image/webp,image/svg+xml,application/pdf",
    )
    ANTIVIRUS_ENABLED = _env_bool("ANTIVIRUS_ENABLED")

    # Cache revalidation
    REVALIDATE_URL = os.getenv("REVALIDATE_URL")
    REVALIDATE_SECRET = os.getenv("REVALIDATE_SECRET")
    REVALIDATE_TIMEOUT = float(os.getenv("REVALIDATE_TIMEOUT", "5"))

    # Versioning
    VERSION_RETRY_ATTEMPTS = int(os.getenv("VERSION_RETRY_ATTEMPTS", "3"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///landing_cms.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    ANTIVIRUS_ENABLED = False
    REVALIDATE_URL = None

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
