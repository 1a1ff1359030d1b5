"""Run configuration for the replay tool.

EngineConfig is pure configuration data handed to the gateway and the CLI.
EngineSettings loads it from PAYMENT_ENGINE_* environment variables, with
explicit overrides (CLI flags) taking precedence, and validates every field.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Any, final

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from payment_engine.core.money import DEFAULT_OUTPUT_PLACES
from payment_engine.core.result import Err, Ok

ENV_PREFIX = "PAYMENT_ENGINE_"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

MAX_OUTPUT_PLACES = 8


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings for one replay run."""

    buffer_capacity: int = 4096  # bytes buffered when reading the input file
    encoding: str = "utf-8"
    delimiter: str = ","
    output_places: int = DEFAULT_OUTPUT_PLACES
    sort_output: bool = False  # dump() order is arbitrary unless sorted here
    log_level: str = "WARNING"


DEFAULT_CONFIG = EngineConfig()


class EngineSettings(BaseSettings):
    """Environment-backed EngineConfig; unset variables keep the defaults."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False, frozen=True)

    buffer_capacity: int = Field(default=DEFAULT_CONFIG.buffer_capacity, gt=0)
    encoding: str = DEFAULT_CONFIG.encoding
    delimiter: str = Field(default=DEFAULT_CONFIG.delimiter, min_length=1, max_length=1)
    output_places: int = Field(
        default=DEFAULT_CONFIG.output_places, ge=0, le=MAX_OUTPUT_PLACES,
    )
    sort_output: bool = DEFAULT_CONFIG.sort_output
    log_level: str = DEFAULT_CONFIG.log_level

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding {value!r}") from None
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    def to_config(self) -> EngineConfig:
        return EngineConfig(**self.model_dump())


def _describe(error: Any) -> str:
    loc = error.get("loc") or ("config",)
    name = str(loc[0])
    return f"{name} ({ENV_PREFIX}{name.upper()}): {error['msg']}"


def load_config(**overrides: Any) -> Ok[EngineConfig] | Err[str]:
    """Environment first, then overrides; every field validated."""
    try:
        settings = EngineSettings(**overrides)
    except ValidationError as e:
        return Err("; ".join(_describe(error) for error in e.errors()))
    return Ok(settings.to_config())
