"""Synchronization defaults for the MonALISA data-pass job."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_int_env
from .errors import ConfigurationError

DEFAULT_YEAR_LOWER_LIMIT = 2023
DEFAULT_SYNCHRONIZATION_PERIOD_SECONDS = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class SyncConfig:
    year_lower_limit: int = DEFAULT_YEAR_LOWER_LIMIT
    period_seconds: int = DEFAULT_SYNCHRONIZATION_PERIOD_SECONDS


def get_sync_config() -> SyncConfig:
    year_lower_limit = optional_int_env("MONALISA_DATA_PASSES_YEAR_LOWER_LIMIT")
    period_seconds = optional_int_env("MONALISA_SYNCHRONIZATION_PERIOD")
    if period_seconds is not None and period_seconds <= 0:
        raise ConfigurationError("MONALISA_SYNCHRONIZATION_PERIOD must be a positive integer")
    return SyncConfig(
        year_lower_limit=(
            DEFAULT_YEAR_LOWER_LIMIT if year_lower_limit is None else year_lower_limit
        ),
        period_seconds=(
            DEFAULT_SYNCHRONIZATION_PERIOD_SECONDS if period_seconds is None else period_seconds
        ),
    )
