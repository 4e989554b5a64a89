"""Shared fixtures: builders for results pages shaped like the source site."""
from typing import List, Optional, Sequence, Tuple

import pytest

from diet_stances.models import Chamber, PoliticianRecord

HEADER_ROW = "<tr><th>選挙区</th><th>氏名</th><th>選択的夫婦別姓</th><th>同性婚</th></tr>"


def duplicated_cell(text: str) -> str:
    """A cell whose text is rendered twice, as on the source pages."""
    return f"<td><span>{text}</span><span class=\"sp\">{text}</span></td>"


def member_row(district: str, party_and_name: str, separate: str, same_sex: str) -> str:
    cells = ''.join(duplicated_cell(v) for v in (district, party_and_name, separate, same_sex))
    return f"<tr>{cells}</tr>"


def results_table(rows: Sequence[Tuple[str, str, str, str]]) -> str:
    return "<table>" + HEADER_ROW + ''.join(member_row(*row) for row in rows) + "</table>"


def results_page(sections: Sequence[Tuple[str, Optional[str]]]) -> str:
    """Build a page from (heading text, table html or None) pairs."""
    body = ''.join(
        f"<h2>{title}</h2>" + (table if table is not None else "<p>準備中</p>")
        for title, table in sections
    )
    return f"<html><body><h1>議員一覧</h1>{body}</body></html>"


@pytest.fixture
def two_election_page() -> str:
    """Two sections (2021 and 2024), two members each."""
    return results_page([
        ("2021年 衆議院議員 当選者リスト", results_table([
            ("北海道1区", "立憲民主党道下 大樹", "賛成", "賛成"),
            ("北海道2区", "自由民主党高橋 祐介", "反対", "無回答"),
        ])),
        ("2024年 衆議院議員 当選者リスト", results_table([
            ("東京1区", "山田太郎", "賛成", "反対"),
            ("東京2区", "公明党佐藤 花子", "無回答", "賛成"),
        ])),
    ])


def make_record(
    separate: str = '賛成',
    same_sex: str = '賛成',
    year: int = 2024,
    party: str = '自由民主党',
    chamber: Chamber = Chamber.REPRESENTATIVES,
    name: str = '山田太郎',
    district: str = '東京1区',
) -> PoliticianRecord:
    return PoliticianRecord(
        chamber=chamber,
        district=district,
        name=name,
        party=party,
        separate_last_name=separate,
        same_sex_marriage=same_sex,
        election_year=year,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def many_records():
    def _many(count: int, chamber: Chamber, years: List[int]) -> List[PoliticianRecord]:
        return [make_record(chamber=chamber, year=years[i % len(years)]) for i in range(count)]
    return _many


@pytest.fixture
def build_page():
    return results_page


@pytest.fixture
def build_table():
    return results_table
