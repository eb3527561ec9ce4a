"""Application configuration using pydantic-settings with a CSVBIND_ env prefix."""

from __future__ import annotations

from typing import Literal

from babel import Locale, UnknownLocaleError
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class CsvBindSettings(BaseSettings):
    """Parse engine settings.

    Every value can be overridden from the environment, e.g.
    ``CSVBIND_WORKERS=4`` or ``CSVBIND_NUMBER_LOCALE=de_DE``.
    """

    model_config = {"env_prefix": "CSVBIND_"}

    delimiter: str = Field(default=",", min_length=1)
    encoding: str = "utf-8-sig"  # strips a leading BOM

    number_locale: str = "en_US"
    strict_grouping: bool = False

    workers: int = Field(default=1, ge=1)
    batch_size: int = Field(default=10_000, ge=1)
    converter_mode: Literal["shared", "per_worker"] = "per_worker"

    max_rejections_kept: int = Field(default=1000, ge=0)
    log_level: str = "INFO"

    @field_validator("number_locale")
    @classmethod
    def _known_locale(cls, value: str) -> str:
        try:
            Locale.parse(value)
        except (UnknownLocaleError, ValueError) as exc:
            raise ValueError(f"unknown locale {value!r}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()
