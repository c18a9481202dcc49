import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LABEL = "default"
ALLOWED_WARNING_DELIVERY_MODES = {"deferred", "immediate"}
MIN_INSPECT_WIDTH = 20


class Settings(BaseSettings):
    app_name: str = "consolekit diagnostics"

    default_label: str = Field(default=DEFAULT_LABEL, validation_alias="CONSOLEKIT_DEFAULT_LABEL")
    warning_delivery: str = Field(
        default="deferred",
        validation_alias="CONSOLEKIT_WARNING_DELIVERY",
    )
    forward_python_warnings: bool = Field(
        default=True,
        validation_alias="CONSOLEKIT_FORWARD_PYTHON_WARNINGS",
    )

    inspect_depth: int = Field(default=2, ge=0, validation_alias="CONSOLEKIT_INSPECT_DEPTH")
    inspect_width: int = Field(
        default=80,
        ge=MIN_INSPECT_WIDTH,
        validation_alias="CONSOLEKIT_INSPECT_WIDTH",
    )

    log_level: str = Field(default="INFO", validation_alias="CONSOLEKIT_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @field_validator("default_label")
    @classmethod
    def validate_default_label(cls, value: str) -> str:
        if not value:
            raise ValueError("CONSOLEKIT_DEFAULT_LABEL must not be empty")
        return value

    @field_validator("warning_delivery")
    @classmethod
    def validate_warning_delivery(cls, value: str) -> str:
        mode = value.lower().strip()
        if mode not in ALLOWED_WARNING_DELIVERY_MODES:
            allowed = ", ".join(sorted(ALLOWED_WARNING_DELIVERY_MODES))
            raise ValueError(f"CONSOLEKIT_WARNING_DELIVERY must be one of: {allowed}")
        return mode

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper().strip()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"CONSOLEKIT_LOG_LEVEL is not a logging level: {value}")
        return level


settings = Settings()


def resolved_log_level() -> int:
    return logging.getLevelName(settings.log_level)
