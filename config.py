import os
from datetime import timedelta


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-key-change-in-production"
    FLASK_ENV = os.environ.get("FLASK_ENV", "production")
    DEBUG = os.environ.get("FLASK_DEBUG", "False").lower() == "true"

    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = FLASK_ENV == "production"
    SESSION_COOKIE_HTTPONLY = True

    # Pending records backend
    PENDING_RECORDS_API_URL = os.environ.get(
        "PENDING_RECORDS_API_URL", "http://localhost:8000"
    )
    PENDING_RECORDS_API_TIMEOUT = float(os.environ.get("PENDING_RECORDS_API_TIMEOUT", 10))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class DevelopmentConfig(Config):
    DEBUG = True
    FLASK_ENV = "development"
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    DEBUG = False
    FLASK_ENV = "production"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-for-testing-only"
    SESSION_COOKIE_SECURE = False
    PENDING_RECORDS_API_URL = "http://records.test"
    PENDING_RECORDS_API_TIMEOUT = 5


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": ProductionConfig,
}
