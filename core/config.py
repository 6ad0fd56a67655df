"""
Application configuration, loaded from environment / .env file.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App & logging
    app_name: str = "refi-batch-pricing"
    log_level: str = Field(default="INFO")

    # Matrix overrides are persisted here as a single JSON document
    matrix_store_path: str = Field(default="llpa_matrix.json")

    # Scenario form defaults
    default_base_rate: float = Field(default=6.75)
    default_break_even_threshold: int = Field(default=18)
    term_years: int = Field(default=30)

    # Worker threads used for a pricing batch; 1 keeps it in-process
    max_workers: int = Field(default=1)

    model_config = SettingsConfigDict(
        env_prefix="REFI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return str(v).strip().upper()

    @field_validator("default_base_rate", mode="before")
    @classmethod
    def _rate_positive(cls, v):
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        f = float(v)
        if f <= 0:
            raise ValueError("default_base_rate must be > 0")
        return f

    @field_validator("max_workers", "term_years")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
