from __future__ import annotations

import pytest

from bookkeeping.domain.errors import ParseError
from bookkeeping.domain.lhc_periods import (
    LhcPeriodKey,
    LhcPeriodParseError,
    extract_lhc_period,
)


@pytest.mark.parametrize(
    ("data_pass_name", "expected"),
    [
        ("LHC22b_apass1", LhcPeriodKey(name="LHC22b", year=2022, period_code="b")),
        ("LHC23zzh_cpass0", LhcPeriodKey(name="LHC23zzh", year=2023, period_code="zzh")),
        ("LHC24af_apass1_skimmed", LhcPeriodKey(name="LHC24af", year=2024, period_code="af")),
        ("LHC23f", LhcPeriodKey(name="LHC23f", year=2023, period_code="f")),
    ],
)
def test_extract_lhc_period(data_pass_name: str, expected: LhcPeriodKey) -> None:
    assert extract_lhc_period(data_pass_name) == expected


def test_data_passes_of_one_period_share_the_key() -> None:
    assert extract_lhc_period("LHC23f_apass1") == extract_lhc_period("LHC23f_apass2")


@pytest.mark.parametrize(
    "data_pass_name",
    ["", "_apass1", "calibration_scratch", "LHCxxb_apass1", "LHC23_apass1", "LHC2b_apass1"],
)
def test_extract_lhc_period_rejects_names_without_period(data_pass_name: str) -> None:
    with pytest.raises(LhcPeriodParseError):
        extract_lhc_period(data_pass_name)


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="calibration_scratch"):
        extract_lhc_period("calibration_scratch")
    assert issubclass(LhcPeriodParseError, ParseError)
