from __future__ import annotations

from bookkeeping.adapters.monalisa.schema import DataPassDetailsPayload, DataPassListing
from bookkeeping.adapters.monalisa.translator import (
    translate_data_pass_details,
    translate_data_passes,
)
from bookkeeping.domain.ports.fetching import DataPassDetails, DataPassRecord


def test_translate_data_passes_keeps_listing_order(
    monalisa_data_passes_payload: dict[str, object],
) -> None:
    records = translate_data_passes(DataPassListing.model_validate(monalisa_data_passes_payload))

    assert [record.name for record in records] == [
        "LHC22b_apass1",
        "LHC23f_apass1",
        "LHC23f_apass2",
        "LHC24a_cpass0",
        "calibration_scratch",
    ]
    assert records[1] == DataPassRecord(
        name="LHC23f_apass1",
        description="LHC23f apass1 reconstruction",
        output_size=10_737_418_240,
        reconstructed_events_count=3_400_000,
        last_run_number=535069,
    )
    assert records[3].last_run_number is None


def test_translate_details_deduplicates_and_sorts(
    monalisa_details_payload: dict[str, object],
) -> None:
    details = translate_data_pass_details(
        DataPassDetailsPayload.model_validate(monalisa_details_payload)
    )

    assert details == DataPassDetails(run_numbers=(535045, 535069, 535087))


def test_translate_empty_details() -> None:
    details = translate_data_pass_details(DataPassDetailsPayload.model_validate({}))

    assert details.run_numbers == ()
