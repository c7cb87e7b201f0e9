"""MonALISA data-pass source adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookkeeping.config.monalisa import get_monalisa_config

from .client import MonALISAAPIError, MonALISAClient

if TYPE_CHECKING:
    from bookkeeping.config.monalisa import MonALISAConfig


def build_monalisa_source(config: MonALISAConfig | None = None) -> MonALISAClient:
    """Create a client from ``config`` or from the environment."""

    return MonALISAClient(config=config or get_monalisa_config())


__all__ = ["MonALISAAPIError", "MonALISAClient", "build_monalisa_source"]
