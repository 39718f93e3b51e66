from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RESAMPLE_CHOICES = ("nearest", "box", "bilinear", "hamming", "bicubic", "lanczos")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AVGHASH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    resample: str = "lanczos"
    intensity: Literal["red", "luma"] = "red"

    @field_validator("resample", mode="before")
    @classmethod
    def normalize_resample(cls, value: str) -> str:
        cleaned = str(value).strip().lower()
        if cleaned not in RESAMPLE_CHOICES:
            raise ValueError(f"resample must be one of {', '.join(RESAMPLE_CHOICES)}")
        return cleaned


@lru_cache
def get_settings() -> Settings:
    return Settings()
