"""Shared fixtures for MonALISA adapter tests."""

from __future__ import annotations

import pytest

from bookkeeping.config.http_resilience import ResilienceConfig, RetryPolicy
from bookkeeping.config.monalisa import MonALISAConfig

DATA_PASSES_URL = "https://monalisa.example/production/data_passes.jsp"
DETAILS_URL = "https://monalisa.example/production/data_pass_details.jsp"


@pytest.fixture
def monalisa_config() -> MonALISAConfig:
    return MonALISAConfig(
        data_passes_url=DATA_PASSES_URL,
        data_pass_details_url=DETAILS_URL,
        resilience=ResilienceConfig(name="monalisa", retry=RetryPolicy(total=0)),
    )
