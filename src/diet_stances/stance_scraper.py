# Standard library imports
import logging
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

# Third-party imports
from bs4 import BeautifulSoup
from bs4.element import Tag

# Local imports
from .config import (
    ELECTION_YEAR_PATTERN,
    MIN_ELECTION_YEAR,
    PARTY_LABELS,
    ROW_CELL_COUNT,
    SECTION_HEADING_SELECTOR,
    SOURCE_URLS,
)
from .models import Chamber, PoliticianRecord
from .utils import EventSink, emit_event, fetch_page
from .validation import validate_extraction

logger = logging.getLogger(__name__)

YEAR_REGEX = re.compile(ELECTION_YEAR_PATTERN)


# --- Section / Election Year Resolution ---

@dataclass(frozen=True)
class YearState:
    """Election year carried from one section heading to the next.

    ``year`` is None when no valid year is in effect; sections under that
    state are skipped.
    """
    year: Optional[int] = None

    @property
    def resolved(self) -> bool:
        return self.year is not None


NO_YEAR = YearState()


@dataclass(frozen=True)
class Section:
    """A section heading and the year state in effect for it."""
    heading: Tag
    title: str
    year_state: YearState


def extract_heading_year(heading_text: str) -> Optional[int]:
    """Return the first 4-digit number followed by 年 in heading_text, if any."""
    match = YEAR_REGEX.search(heading_text)
    return int(match.group(1)) if match else None


def is_valid_election_year(year: int, current_year: int) -> bool:
    return MIN_ELECTION_YEAR < year <= current_year


def advance_year_state(state: YearState, heading_text: str, current_year: int) -> YearState:
    """Compute the year state for a heading given the state before it.

    A heading without year text keeps the previous state. A heading with a
    valid year switches to it; one with an out-of-range year resets to NO_YEAR.
    """
    year = extract_heading_year(heading_text)
    if year is None:
        return state
    if is_valid_election_year(year, current_year):
        return YearState(year)
    return NO_YEAR


def resolve_section_years(
    headings: Sequence[Tag],
    current_year: Optional[int] = None,
    event_sink: Optional[EventSink] = None
) -> Tuple[List[Section], List[int]]:
    """Walk headings in document order, resolving each one's election year.

    Returns:
        Tuple of (sections in document order, distinct valid years in the
        order they were first seen)
    """
    if current_year is None:
        current_year = datetime.now().year

    state = NO_YEAR
    sections: List[Section] = []
    discovered_years: List[int] = []

    for heading in headings:
        title = heading.get_text().strip()
        state = advance_year_state(state, title, current_year)
        heading_year = extract_heading_year(title)

        if heading_year is not None:
            if state.resolved:
                if state.year not in discovered_years:
                    discovered_years.append(state.year)
                emit_event(logger, event_sink, 'section_resolved', title=title, year=state.year)
            else:
                emit_event(logger, event_sink, 'invalid_year', level=logging.INFO,
                           title=title, year=heading_year)

        sections.append(Section(heading=heading, title=title, year_state=state))

    return sections, discovered_years


# --- Table Location ---

def find_section_table(heading: Tag) -> Optional[Tag]:
    """Locate the data table belonging to a section heading.

    Prefers the first table among the heading's following siblings; otherwise
    searches inside the siblings up to the next heading of the same kind.
    """
    table = heading.find_next_sibling('table')
    if table is not None:
        return table

    for sibling in heading.find_next_siblings():
        if sibling.name == heading.name:
            break
        table = sibling.find('table')
        if table is not None:
            return table
    return None


def extract_table_rows(table: Tag) -> List[Tag]:
    """Return the table's data rows (everything after the header row)."""
    return table.find_all('tr')[1:]


# --- Field Splitting ---

def halve_duplicated_text(text: str) -> str:
    """Recover a cell value that the page renders twice with no separator.

    "北海道1区北海道1区" -> "北海道1区". Odd-length input loses its last
    character ("ABC" -> "A").
    """
    return text[:len(text) // 2]


def split_party_and_name(combined: str, parties: Sequence[str] = PARTY_LABELS) -> Tuple[str, str]:
    """Split "自由民主党山田太郎" into ("自由民主党", "山田太郎").

    The first label in ``parties`` that prefixes ``combined`` wins. Without a
    match the party is "" and the whole string is the name.
    """
    for party in parties:
        if combined.startswith(party):
            return party, combined[len(party):]
    return '', combined


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def parse_row(row: Tag, chamber: Chamber, election_year: int) -> Optional[PoliticianRecord]:
    """Build a record from a table row, or None if the row has too few cells."""
    cells = row.find_all('td')
    if len(cells) < ROW_CELL_COUNT:
        return None

    district = halve_duplicated_text(_cell_text(cells[0]))
    party, name = split_party_and_name(halve_duplicated_text(_cell_text(cells[1])))
    separate_last_name = halve_duplicated_text(_cell_text(cells[2]))
    same_sex_marriage = halve_duplicated_text(_cell_text(cells[3]))

    return PoliticianRecord(
        chamber=chamber,
        district=district,
        name=name,
        party=party,
        separate_last_name=separate_last_name,
        same_sex_marriage=same_sex_marriage,
        election_year=election_year,
    )


# --- Chamber Parsing ---

@dataclass(frozen=True)
class ChamberResult:
    """Validated extraction output for one chamber."""
    chamber: Chamber
    records: Tuple[PoliticianRecord, ...]
    election_years: Tuple[int, ...]
    warnings: Tuple[str, ...] = ()


def parse_section(
    section: Section,
    chamber: Chamber,
    event_sink: Optional[EventSink] = None
) -> List[PoliticianRecord]:
    """Extract the records of one section. Unresolved sections yield nothing."""
    if not section.year_state.resolved:
        emit_event(logger, event_sink, 'section_skipped', title=section.title,
                   reason='no valid election year')
        return []

    table = find_section_table(section.heading)
    if table is None:
        emit_event(logger, event_sink, 'table_missing', level=logging.INFO, title=section.title)
        return []

    rows = extract_table_rows(table)
    if not rows:
        emit_event(logger, event_sink, 'section_skipped', level=logging.INFO,
                   title=section.title, reason='no rows in table')
        return []

    records: List[PoliticianRecord] = []
    for index, row in enumerate(rows, start=1):
        record = parse_row(row, chamber, section.year_state.year)
        if record is None:
            emit_event(logger, event_sink, 'row_skipped', title=section.title, row=index)
            continue
        records.append(record)

    emit_event(logger, event_sink, 'section_parsed', level=logging.INFO, title=section.title,
               year=section.year_state.year, records=len(records))
    return records


def parse_chamber_page(
    html: str,
    chamber: Chamber,
    current_year: Optional[int] = None,
    event_sink: Optional[EventSink] = None
) -> ChamberResult:
    """
    Parse a chamber results page into validated politician records.

    Args:
        html: Raw page markup
        chamber: Chamber the page lists
        current_year: Latest acceptable election year (defaults to this year)
        event_sink: Optional callable receiving structured pipeline events

    Returns:
        ChamberResult with the records, discovered election years and any warnings

    Raises:
        ScrapingStructureError: If the page structure doesn't match expectations
    """
    soup = BeautifulSoup(html, 'html.parser')
    headings = soup.find_all(SECTION_HEADING_SELECTOR)
    sections, discovered_years = resolve_section_years(headings, current_year, event_sink)

    records: List[PoliticianRecord] = []
    for section in sections:
        records.extend(parse_section(section, chamber, event_sink))

    warnings = validate_extraction(chamber, len(headings), discovered_years, records, event_sink)

    year_counts = Counter(record.election_year for record in records)
    emit_event(logger, event_sink, 'chamber_parsed', level=logging.INFO, chamber=chamber.value,
               records=len(records), election_years=list(discovered_years),
               year_distribution=dict(year_counts))

    return ChamberResult(
        chamber=chamber,
        records=tuple(records),
        election_years=tuple(discovered_years),
        warnings=tuple(warnings),
    )


def scrape_chamber(
    chamber: Chamber,
    url: Optional[str] = None,
    current_year: Optional[int] = None,
    event_sink: Optional[EventSink] = None
) -> ChamberResult:
    """
    Fetch and parse one chamber's results page.

    Raises:
        PageFetchError: If the page could not be fetched
        ScrapingStructureError: If the page structure doesn't match expectations
    """
    url = url or SOURCE_URLS[chamber.value]
    logger.info(f"Starting scraping process for {chamber.value} ({url})...")
    html = fetch_page(url)
    result = parse_chamber_page(html, chamber, current_year=current_year, event_sink=event_sink)
    logger.info(
        f"Scraping completed: Retrieved data for {len(result.records)} {chamber.value} across "
        f"{len(result.election_years)} election years: {', '.join(map(str, result.election_years))}"
    )
    return result
