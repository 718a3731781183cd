import os
from dataclasses import dataclass

# Resolve project base directory robustly (backend/claimtracker -> backend -> repo root)
_HERE = os.path.dirname(__file__)
_BASE_DIR = os.path.abspath(os.path.join(_HERE, "..", ".."))
_DEFAULT_DB = "sqlite:///" + os.path.join(_BASE_DIR, "db", "claims.sqlite")


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class BaseConfig:
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI: str = os.getenv("DATABASE_URL", _DEFAULT_DB)
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    # Create missing tables during app startup (migrations remain available via `flask db`)
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "true").lower() != "false"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Bearer tokens expire after 24 hours unless overridden
    AUTH_TOKEN_MAX_AGE: int = _int_env("AUTH_TOKEN_MAX_AGE", 60 * 60 * 24)
    # Language model
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL") or None
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4")
    LLM_TEMPERATURE: float = _float_env("LLM_TEMPERATURE", 0.7)
    LLM_REPORT_MAX_TOKENS: int = _int_env("LLM_REPORT_MAX_TOKENS", 2000)
    LLM_CONCLUSION_MAX_TOKENS: int = _int_env("LLM_CONCLUSION_MAX_TOKENS", 200)
    LLM_TIMEOUT: float = _float_env("LLM_TIMEOUT", 120.0)
    # External URL scheme preference (affects url_for(..., _external=True))
    PREFERRED_URL_SCHEME: str = os.getenv("PREFERRED_URL_SCHEME", "https" if os.getenv("FLASK_ENV") == "production" else "http")


@dataclass
class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True


@dataclass
class ProductionConfig(BaseConfig):
    DEBUG: bool = False


@dataclass
class TestingConfig(BaseConfig):
    TESTING: bool = True
    DEBUG: bool = False
    SECRET_KEY: str = "test-secret"
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///:memory:"
    AUTO_CREATE_TABLES: bool = True
    OPENAI_API_KEY: str | None = None


CONFIG_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(name: str | None):
    if not name:
        name = os.getenv("FLASK_ENV", "development")
    return CONFIG_MAP.get(name, DevelopmentConfig)()
