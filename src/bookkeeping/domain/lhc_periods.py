"""Derive LHC period keys from data-pass names.

Data passes are named ``<period>_<pass>`` (``LHC22b_apass1``); the period name
itself encodes the two-digit year and the period code (``LHC22b`` is period
``b`` of 2022).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from bookkeeping.domain.errors import ParseError

BASE_CENTURY: Final[int] = 2000
NAME_SEPARATOR: Final[str] = "_"

_PERIOD_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<prefix>[A-Za-z]+)(?P<year>\d{2})(?P<code>[A-Za-z][A-Za-z0-9]*)$"
)


class LhcPeriodParseError(ParseError):
    """Raised when a data-pass name carries no recognisable LHC period."""


@dataclass(frozen=True, slots=True)
class LhcPeriodKey:
    """Natural key of an LHC period and the attributes derived from it."""

    name: str
    year: int
    period_code: str


def extract_lhc_period(data_pass_name: str) -> LhcPeriodKey:
    """Return the LHC period encoded in ``data_pass_name``."""

    period_name = data_pass_name.strip().split(NAME_SEPARATOR, 1)[0]
    match = _PERIOD_NAME_PATTERN.match(period_name)
    if match is None:
        raise LhcPeriodParseError(f"Cannot extract LHC period from {data_pass_name!r}")
    return LhcPeriodKey(
        name=period_name,
        year=BASE_CENTURY + int(match.group("year")),
        period_code=match.group("code"),
    )

