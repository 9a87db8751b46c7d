"""
Configuration settings for different environments
"""
import logging
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _require_in_production(var_name, default):
    """Return env var value. Outside development, warn loudly if still using default."""
    value = os.environ.get(var_name, "")
    if value:
        return value
    env = os.environ.get("FLASK_ENV", "development")
    if env not in ("development", "testing") and default:
        logger.warning(
            "%s is using an insecure default. Set it via environment variable!", var_name
        )
    return default


def _database_url():
    """Read DATABASE_URL, fixing the legacy postgres:// scheme for SQLAlchemy 2.x"""
    url = os.environ.get("DATABASE_URL", "")
    if not url:
        return "sqlite:///marketplace.db"
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    """Base configuration"""
    SECRET_KEY = _require_in_production("SECRET_KEY", "dev-only-" + secrets.token_hex(16))

    # Database
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT authentication
    JWT_SECRET_KEY = _require_in_production("JWT_SECRET_KEY", "dev-only-" + secrets.token_hex(32))
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_IN = timedelta(days=int(os.environ.get("JWT_EXPIRES_DAYS", "7")))
    JWT_REFRESH_GRACE_DAYS = int(os.environ.get("JWT_REFRESH_GRACE_DAYS", "7"))
    PASSWORD_RESET_EXPIRES_IN = timedelta(hours=1)
    EMAIL_VERIFICATION_EXPIRES_IN = timedelta(hours=24)

    # Password hashing
    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", "12"))

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*").split(",")

    # Rate limiting
    RATELIMIT_ENABLED = os.environ.get("RATELIMIT_ENABLED", "true").lower() in ["true", "on", "1"]
    RATELIMIT_HEADERS_ENABLED = True

    # Pagination
    ITEMS_PER_PAGE = 10
    MAX_ITEMS_PER_PAGE = 100

    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB

    # Links placed in logged emails (verification, password reset)
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")

    # OAuth profile endpoints
    GOOGLE_USERINFO_URL = os.environ.get(
        "GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v3/userinfo"
    )
    FACEBOOK_GRAPH_URL = os.environ.get("FACEBOOK_GRAPH_URL", "https://graph.facebook.com/me")
    OAUTH_TIMEOUT = int(os.environ.get("OAUTH_TIMEOUT", "5"))

    # Logging / monitoring
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    SENTRY_DSN = os.environ.get("SENTRY_DSN")
    ENABLE_SCHEDULER = os.environ.get("ENABLE_SCHEDULER", "").lower() == "true"


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 20,
        "max_overflow": 40,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }
