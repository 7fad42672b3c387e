import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from enum import Enum

from colorizer.core.domain.models import (
    DEFAULT_COLOR_RULE_NAME,
    FIND_LOGGER_BACKGROUND,
    ODD_ROW_BACKGROUND,
    Color,
)

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "rule-colorizer"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.JSON
    OTEL_SERVICE_NAME: str = "rule-colorizer"

    # --- Persistence ---
    # Directory holding one '<encoded name>.colors' file per rule collection.
    SETTINGS_DIRECTORY: str = os.path.join(os.path.expanduser("~"), ".colorizer")
    COLORS_EXTENSION: str = ".colors"

    # --- Rules ---
    DEFAULT_COLOR_RULE_NAME: str = DEFAULT_COLOR_RULE_NAME

    # --- Palette ---
    # Env values are JSON, e.g. COLOR_ODD_ROW_BACKGROUND='{"r": 240, "g": 240, "b": 240}'
    COLOR_ODD_ROW_BACKGROUND: Color = ODD_ROW_BACKGROUND
    FIND_LOGGER_BACKGROUND: Color = FIND_LOGGER_BACKGROUND

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
