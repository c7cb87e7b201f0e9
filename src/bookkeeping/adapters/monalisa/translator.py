"""Translate MonALISA payloads into port records."""

from __future__ import annotations

from bookkeeping.domain.ports.fetching import DataPassDetails, DataPassRecord

from .schema import DataPassDetailsPayload, DataPassListing


def translate_data_passes(listing: DataPassListing) -> list[DataPassRecord]:
    """Keep the listing order, which is the processing order of a run."""

    return [
        DataPassRecord(
            name=name,
            description=entry.description,
            output_size=entry.output_size,
            reconstructed_events_count=entry.reconstructed_events,
            last_run_number=entry.last_run,
        )
        for name, entry in listing.root.items()
    ]


def translate_data_pass_details(payload: DataPassDetailsPayload) -> DataPassDetails:
    run_numbers = sorted({entry.run_no for entry in payload.root.values()})
    return DataPassDetails(run_numbers=tuple(run_numbers))
