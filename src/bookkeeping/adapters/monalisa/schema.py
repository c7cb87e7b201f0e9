"""Pydantic models describing the MonALISA data-pass payloads."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, RootModel, field_validator

log = logging.getLogger(__name__)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class MonALISABaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "MonALISA %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class DataPassEntry(MonALISABaseModel):
    """One value of the data-pass listing, keyed by data-pass name."""

    description: str
    reconstructed_events: int | None = None
    output_size: int | None = None
    last_run: int | None = None

    _normalize_numbers = field_validator(
        "reconstructed_events", "output_size", "last_run", mode="before"
    )(_blank_to_none)


class DataPassListing(RootModel[dict[str, DataPassEntry]]):
    pass


class DataPassRunEntry(MonALISABaseModel):
    run_no: int


class DataPassDetailsPayload(RootModel[dict[str, DataPassRunEntry]]):
    pass
