"""
Testing configuration for the marketplace backend
"""
import os
from datetime import timedelta

from .settings import Config


class TestingConfig(Config):
    """Testing configuration with isolated database and safe defaults"""

    TESTING = True
    DEBUG = False

    # Use in-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret"
    JWT_EXPIRES_IN = timedelta(minutes=5)

    # Use cheap password hashing for speed
    BCRYPT_LOG_ROUNDS = 4

    # Disable rate limiting in tests
    RATELIMIT_ENABLED = False

    LOG_LEVEL = "WARNING"

    CORS_ORIGINS = ["http://localhost:3000"]

    ENABLE_SCHEDULER = False
    SENTRY_DSN = None
