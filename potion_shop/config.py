"""Application configuration using Pydantic Settings."""

import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Potions
    potion_number_prefix: str = "POT"
    min_ingredients: int = 3
    default_ingredient_unit: str = "g"

    # Notifications
    notification_life_ms: int = 5000
    delete_notification_life_ms: int = 3000

    # Application
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POTION_SHOP_",
        case_sensitive=False,
    )

    @field_validator("potion_number_prefix")
    @classmethod
    def prefix_is_uppercase(cls, value: str) -> str:
        """Potion numbers only accept uppercase ASCII letters as prefix."""
        if not re.fullmatch(r"[A-Z]+", value):
            raise ValueError(
                f"potion_number_prefix must be uppercase letters only, got '{value}'"
            )
        return value


settings = Settings()
