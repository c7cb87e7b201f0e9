"""HTTP client for the MonALISA data-pass service."""

from __future__ import annotations

import asyncio
import sqlite3
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from bookkeeping.adapters.http_resilience import ResilientClient
from bookkeeping.domain.errors import ExternalSourceError

from .schema import DataPassDetailsPayload, DataPassListing
from .translator import translate_data_pass_details, translate_data_passes

if TYPE_CHECKING:
    from collections.abc import Callable

    from bookkeeping.config.http_resilience import ResilienceConfig
    from bookkeeping.config.monalisa import MonALISAConfig
    from bookkeeping.domain.ports.fetching import DataPassDetails, DataPassRecord

log = getLogger(__name__)

DETAILS_QUERY_PARAMETER = "production"


class MonALISAAPIError(ExternalSourceError):
    """Raised when MonALISA cannot be reached or returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MonALISAClient:
    """Data-pass source backed by the MonALISA HTTP endpoints."""

    def __init__(
        self,
        *,
        config: MonALISAConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def get_data_passes(self) -> list[DataPassRecord]:
        return asyncio.run(self._get_data_passes_async())

    def get_data_pass_details(self, description: str) -> DataPassDetails:
        return asyncio.run(self._get_data_pass_details_async(description))

    async def _get_data_passes_async(self) -> list[DataPassRecord]:
        async with self._client_factory(self._resilience) as client:
            payload = await self._perform_request(client=client, url=self._config.data_passes_url)
        listing = _validate(DataPassListing, payload)
        records = translate_data_passes(listing)
        log.info("Fetched %s data passes from MonALISA", len(records))
        return records

    async def _get_data_pass_details_async(self, description: str) -> DataPassDetails:
        async with self._client_factory(self._resilience) as client:
            payload = await self._perform_request(
                client=client,
                url=self._config.data_pass_details_url,
                params={DETAILS_QUERY_PARAMETER: description},
            )
        return translate_data_pass_details(_validate(DataPassDetailsPayload, payload))

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        url: str,
        params: dict[str, str] | None = None,
    ) -> object:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise MonALISAAPIError(
                f"MonALISA request failed with status {status}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise MonALISAAPIError(f"MonALISA request failed: {exc}") from exc
        except sqlite3.Error as exc:
            raise MonALISAAPIError(f"MonALISA response cache failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MonALISAAPIError("MonALISA returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise MonALISAAPIError("Unexpected MonALISA response payload")
        return payload


def _validate[M: (DataPassListing, DataPassDetailsPayload)](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MonALISAAPIError(f"Invalid MonALISA payload: {exc}") from exc
