# src/diet_stances/config.py
"""Central configuration settings for the Diet stance scraper."""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, List

# --- Environment Variables ---
# Load .env file if it exists in the project root (for local development)
env_path = Path(__file__).resolve().parent.parent.parent / '.env' # src/diet_stances -> project root
load_dotenv(dotenv_path=env_path)

# --- Source Pages ---
# One results page per chamber. Keys match Chamber values in models.py.
SOURCE_URLS: Dict[str, str] = {
    'representatives': os.environ.get('DIET_STANCES_REPRESENTATIVES_URL', 'https://yashino.me/house-r'),
    'councillors': os.environ.get('DIET_STANCES_COUNCILLORS_URL', 'https://yashino.me/house-c'),
}

# --- Network Configuration ---
FETCH_TIMEOUT_SECONDS = 40
FETCH_MAX_ATTEMPTS = 4

# --- Page Structure ---
# Each election's results start with one of these headings
SECTION_HEADING_SELECTOR = 'h2'
# e.g. "2024年 衆議院議員 当選者リスト"
ELECTION_YEAR_PATTERN = r'([0-9]{4})年'  # ASCII digits only; full-width ２０２４年 is not year text
# Exclusive lower bound; the upper bound is the current calendar year
MIN_ELECTION_YEAR = 1945
# Cells per data row: district, party+name, separate surnames, same-sex marriage
ROW_CELL_COUNT = 4

# Order matters: the first label that prefixes the cell text wins
PARTY_LABELS: List[str] = [
    '自由民主党',
    '公明党',
    '立憲民主党',
    '日本維新の会',
    '国民民主党',
    '共産党',
    '社会民主党',
    '日本保守党',
    '参政党',
    'れいわ新選組',
    '無所属',
]

# --- Validation Thresholds ---
# Seats per chamber; counts below the minimum raise a warning, not an error
EXPECTED_MEMBER_COUNTS: Dict[str, int] = {
    'representatives': 465,
    'councillors': 245,
}
MIN_MEMBER_COUNTS: Dict[str, int] = {
    'representatives': 400,
    'councillors': 200,
}
# Councillors are elected in staggered halves, so a single election year is suspicious
SINGLE_YEAR_WARNING_CHAMBER = 'councillors'
SINGLE_YEAR_WARNING_MIN_RECORDS = 100

# --- File System ---
# Base directory for all output (can be overridden via env or command line)
DEFAULT_BASE_DATA_DIR = Path(os.environ.get('DIET_STANCES_DATA_DIR', 'data'))
OUTPUT_SUBDIR = 'politicians'
LOG_SUBDIR = 'logs'

# Output file names
COMBINED_RECORDS_FILE = 'politicians.json'
COMBINED_STATISTICS_FILE = 'statistics.json'
COMBINED_CSV_FILE = 'politicians.csv'

# Column order for records (JSON field order and CSV columns)
RECORD_COLUMNS: List[str] = [
    'chamber', 'district', 'name', 'party',
    'separateLastName', 'sameSexMarriage', 'electionYear',
]

# --- Logging ---
MAIN_LOG_FILE = 'diet_stances.log'
MONITOR_LOG_FILE = 'monitor_page_structure.log'
