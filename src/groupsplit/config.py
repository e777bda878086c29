from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    settlement_tolerance: Decimal = Field(Decimal("0.01"), alias="GROUPSPLIT_SETTLEMENT_TOLERANCE", ge=0)
    default_currency: str = Field("USD", alias="GROUPSPLIT_DEFAULT_CURRENCY", min_length=3, max_length=3)
    log_level: str = Field("INFO", alias="GROUPSPLIT_LOG_LEVEL")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping().get(self.log_level.upper(), logging.INFO)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
