import os
from datetime import timedelta


def _flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _database_uri():
    if os.environ.get("DATABASE_URL"):
        return os.environ["DATABASE_URL"]

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "farmconnect")
    return f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


class Config:
    """Settings read from the environment when the app is created."""

    def __init__(self):
        self.ENV = os.environ.get("APP_ENV", "development")
        self.PORT = int(os.environ.get("PORT", 5000))
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

        self.SQLALCHEMY_DATABASE_URI = _database_uri()
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", True)

        self.JWT_SECRET_KEY = os.environ.get("JWT_SECRET", "change-me")
        self.JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
        self.JWT_TOKEN_LOCATION = ["headers"]

        self.CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",")]

        # include raw exception text in 500 responses
        self.EXPOSE_ERROR_DETAILS = _flag("EXPOSE_ERROR_DETAILS", False)
        # single-transaction conditional accept instead of two separate writes
        self.ATOMIC_ORDER_ACCEPT = _flag("ATOMIC_ORDER_ACCEPT", False)
        self.LOW_STOCK_THRESHOLD = float(os.environ.get("LOW_STOCK_THRESHOLD", 20))

    def as_dict(self):
        return {k: v for k, v in vars(self).items() if k.isupper()}
