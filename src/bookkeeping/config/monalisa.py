"""MonALISA configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_int_env, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

MONALISA_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class MonALISAConfig:
    """Endpoints and HTTP behaviour for the MonALISA data-pass service."""

    data_passes_url: str
    data_pass_details_url: str
    resilience: ResilienceConfig


def get_monalisa_config(*, resilience: ResilienceConfig | None = None) -> MonALISAConfig:
    values = require_env_vars(("MONALISA_DATA_PASSES_URL", "MONALISA_DATA_PASS_DETAILS_URL"))
    return MonALISAConfig(
        data_passes_url=values["MONALISA_DATA_PASSES_URL"],
        data_pass_details_url=values["MONALISA_DATA_PASS_DETAILS_URL"],
        resilience=resilience
        or ResilienceConfig(
            name="monalisa",
            timeout_seconds=MONALISA_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            cache=_cache_from_environment(),
        ),
    )


def _cache_from_environment() -> CacheConfig | None:
    ttl = optional_int_env("MONALISA_HTTP_CACHE_TTL")
    if ttl is None or ttl == 0:
        return None
    if ttl < 0:
        raise ConfigurationError("MONALISA_HTTP_CACHE_TTL must be non-negative")
    return CacheConfig(
        default_ttl_seconds=float(ttl),
        should_cache=_is_non_empty_object,
    )


def _is_non_empty_object(payload: object) -> bool:
    return isinstance(payload, dict) and bool(payload)
