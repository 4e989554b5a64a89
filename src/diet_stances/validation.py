# src/diet_stances/validation.py
"""Post-extraction checks for a chamber's record set.

Hard failures raise ScrapingStructureError so that nothing is written for the
chamber. Soft warnings are logged and returned to the caller.
"""

import logging
from typing import List, Optional, Sequence

from .config import (
    EXPECTED_MEMBER_COUNTS,
    MIN_MEMBER_COUNTS,
    SINGLE_YEAR_WARNING_CHAMBER,
    SINGLE_YEAR_WARNING_MIN_RECORDS,
)
from .models import Chamber, PoliticianRecord
from .utils import EventSink, emit_event

logger = logging.getLogger(__name__)

# Reason codes carried by ScrapingStructureError
NO_HEADINGS = 'no_headings'
NO_VALID_YEAR = 'no_valid_year'
NO_RECORDS = 'no_records'


# --- Custom Exceptions ---
class ScrapingStructureError(Exception):
    """Custom exception for unexpected results page structure during scraping."""

    def __init__(self, chamber: Chamber, reason: str, message: str):
        self.chamber = chamber
        self.reason = reason
        super().__init__(f"[{chamber.value}] {message}")


def validate_extraction(
    chamber: Chamber,
    heading_count: int,
    discovered_years: Sequence[int],
    records: Sequence[PoliticianRecord],
    event_sink: Optional[EventSink] = None
) -> List[str]:
    """Check a chamber's extraction results.

    Args:
        chamber: Chamber that was scraped
        heading_count: Number of section headings found in the page
        discovered_years: Distinct valid election years seen, in page order
        records: All records extracted from the page

    Returns:
        Warning messages for suspicious but usable results (may be empty)

    Raises:
        ScrapingStructureError: If the page had no headings, no heading with a
            valid election year, or produced no records
    """
    if heading_count == 0:
        raise ScrapingStructureError(
            chamber, NO_HEADINGS,
            "No section headings found in the page. Cannot determine election years."
        )
    if not discovered_years:
        raise ScrapingStructureError(
            chamber, NO_VALID_YEAR,
            "No valid election year was found in the page headings. Cannot continue without election year data."
        )
    if not records:
        raise ScrapingStructureError(
            chamber, NO_RECORDS,
            "No politicians found with valid election years. Check the page structure."
        )

    warnings: List[str] = []
    count = len(records)

    minimum = MIN_MEMBER_COUNTS.get(chamber.value)
    if minimum is not None and count < minimum:
        warnings.append(
            f"Small number of {chamber.value} found: {count} "
            f"(expected around {EXPECTED_MEMBER_COUNTS[chamber.value]})"
        )

    if (
        chamber.value == SINGLE_YEAR_WARNING_CHAMBER
        and len(discovered_years) == 1
        and count > SINGLE_YEAR_WARNING_MIN_RECORDS
    ):
        warnings.append(
            f"Only one election year ({discovered_years[0]}) detected for {chamber.value}. "
            "This might be incorrect as councillors are typically elected in different years."
        )

    for message in warnings:
        emit_event(logger, event_sink, 'warning_raised', level=logging.WARNING,
                   chamber=chamber.value, message=message)
    return warnings
