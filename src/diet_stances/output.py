# src/diet_stances/output.py
"""Serialize records and statistics and hand them to a writable sink."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence

from .config import (
    COMBINED_CSV_FILE,
    COMBINED_RECORDS_FILE,
    COMBINED_STATISTICS_FILE,
)
from .models import Chamber, PoliticianRecord
from .statistics import generate_statistics, records_to_dataframe

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    """Anything that can store a named, already-serialized payload."""

    def write(self, name: str, payload: str) -> None:
        ...


class DirectorySink:
    """Writes payloads as UTF-8 files inside a directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def write(self, name: str, payload: str) -> None:
        path = self.base_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding='utf-8')
        logger.info(f"Saved {name} to {path}")


def to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def records_to_csv(records: Sequence[PoliticianRecord]) -> str:
    """Render records as CSV text with the published column order."""
    return records_to_dataframe(records).to_csv(index=False)


def output_names(chamber: Chamber) -> Dict[str, str]:
    """File names for a chamber's records and statistics."""
    if chamber is Chamber.ALL:
        return {'records': COMBINED_RECORDS_FILE, 'statistics': COMBINED_STATISTICS_FILE}
    return {'records': f"{chamber.value}.json", 'statistics': f"statistics_{chamber.value}.json"}


def write_outputs(
    sink: OutputSink,
    records: Sequence[PoliticianRecord],
    chamber: Chamber,
    statistics: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Write the records array and statistics object for a chamber (or Chamber.ALL).

    Returns:
        The statistics that were written
    """
    if statistics is None:
        statistics = generate_statistics(records, chamber)
    names = output_names(chamber)

    sink.write(names['records'], to_json([record.to_dict() for record in records]))
    sink.write(names['statistics'], to_json(statistics))
    if chamber is Chamber.ALL:
        sink.write(COMBINED_CSV_FILE, records_to_csv(records))

    logger.info(f"Wrote {len(records)} {chamber.value} records and statistics")
    return statistics
