"""Configuration package"""
from .settings import Config, DevelopmentConfig, ProductionConfig
from .testing import TestingConfig

# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}

__all__ = ["Config", "DevelopmentConfig", "ProductionConfig", "TestingConfig", "config"]
