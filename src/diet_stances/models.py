# src/diet_stances/models.py
"""Record types shared by the scraper, validation and statistics modules."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .config import MIN_ELECTION_YEAR


class Chamber(str, Enum):
    """Chamber of the National Diet."""
    REPRESENTATIVES = 'representatives'  # 衆議院
    COUNCILLORS = 'councillors'  # 参議院
    # Only used to tag combined output, never produced by extraction
    ALL = 'all'


@dataclass(frozen=True)
class PoliticianRecord:
    """One member's stances as listed on a chamber results page."""
    chamber: Chamber
    district: str
    name: str
    party: str
    separate_last_name: str  # 選択的夫婦別姓
    same_sex_marriage: str  # 同性婚
    election_year: int

    def __post_init__(self):
        if self.chamber is Chamber.ALL:
            raise ValueError("Records must belong to a single chamber, not 'all'")
        # The upper bound (current year) is enforced when section headings are resolved
        if self.election_year <= MIN_ELECTION_YEAR:
            raise ValueError(f"Election year out of range: {self.election_year}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the published field names and order."""
        return {
            'chamber': self.chamber.value,
            'district': self.district,
            'name': self.name,
            'party': self.party,
            'separateLastName': self.separate_last_name,
            'sameSexMarriage': self.same_sex_marriage,
            'electionYear': self.election_year,
        }
