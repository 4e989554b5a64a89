# src/diet_stances/statistics.py
"""Aggregate stance counts for a set of politician records."""

from typing import Any, Dict, Sequence

import pandas as pd

from .config import RECORD_COLUMNS
from .models import Chamber, PoliticianRecord

STANCE_COLUMNS = ['separateLastName', 'sameSexMarriage']


def records_to_dataframe(records: Sequence[PoliticianRecord]) -> pd.DataFrame:
    """Build a DataFrame with the published column names, one row per record."""
    return pd.DataFrame([record.to_dict() for record in records], columns=RECORD_COLUMNS)


def _stance_breakdowns(df: pd.DataFrame) -> Dict[str, Dict[str, int]]:
    """Count each stance value present in df, per stance column."""
    breakdowns = {}
    for column in STANCE_COLUMNS:
        # sort=False keeps values in order of first appearance
        counts = df[column].value_counts(sort=False)
        breakdowns[column] = {str(value): int(count) for value, count in counts.items()}
    return breakdowns


def generate_statistics(records: Sequence[PoliticianRecord], chamber: Chamber) -> Dict[str, Any]:
    """
    Summarize stances overall, by election year and by party.

    Only values that occur in ``records`` become keys; nothing is zero-filled,
    so an empty record set produces empty mappings.

    Args:
        records: Records to summarize (not modified)
        chamber: Chamber tag for the output, Chamber.ALL for combined records

    Returns:
        JSON-serializable statistics dictionary
    """
    df = records_to_dataframe(records)

    stats: Dict[str, Any] = {
        'chamber': chamber.value,
        'total': int(len(df)),
    }
    stats.update(_stance_breakdowns(df))

    by_year: Dict[int, Dict[str, Any]] = {}
    for year, year_df in df.groupby('electionYear', sort=False):
        by_year[int(year)] = {'total': int(len(year_df)), **_stance_breakdowns(year_df)}
    stats['byElectionYear'] = by_year

    by_party: Dict[str, Dict[str, Any]] = {}
    for party, party_df in df.groupby('party', sort=False):
        by_party[str(party)] = {'count': int(len(party_df)), **_stance_breakdowns(party_df)}
    stats['byParty'] = by_party

    return stats
