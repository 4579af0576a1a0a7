import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Public landings live on <domain>.<LANDING_BASE_DOMAIN>
    LANDING_BASE_DOMAIN = os.getenv("LANDING_BASE_DOMAIN", "prohelper.pro")
    DEFAULT_LANDING_TEMPLATE = os.getenv("DEFAULT_LANDING_TEMPLATE", "default")

    # Where the upload service publishes stored files
    ASSET_PUBLIC_BASE_URL = os.getenv("ASSET_PUBLIC_BASE_URL", "/uploads/landings")

    # Enforced by the upload service before an asset is registered
    MAX_ASSET_BYTES = 5 * 1024 * 1024
    MAX_AVATAR_BYTES = 2 * 1024 * 1024

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///sitebuilder-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-32b"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    ASSET_PUBLIC_BASE_URL = "https://cdn.test/landings"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
