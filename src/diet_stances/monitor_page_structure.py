# monitor_page_structure.py
"""Monitor the structure of the chamber results pages for changes."""

# Standard library imports
import argparse
import logging
from datetime import datetime
from typing import Dict, List, Optional

# Third-party imports
from bs4 import BeautifulSoup

# Local imports
from .config import (
    MONITOR_LOG_FILE,
    ROW_CELL_COUNT,
    SECTION_HEADING_SELECTOR,
    SOURCE_URLS,
)
from .stance_scraper import extract_heading_year, is_valid_election_year
from .utils import PageFetchError, fetch_page, setup_logging, setup_project_paths

logger = logging.getLogger(__name__)

# --- Configuration ---
MONITOR_TARGETS: Dict[str, str] = {
    'House of Representatives': SOURCE_URLS['representatives'],
    'House of Councillors': SOURCE_URLS['councillors'],
}


# --- Monitoring Logic ---
def check_page_structure(name: str, url: str, current_year: Optional[int] = None) -> bool:
    """Performs structural checks on a single page.

    Args:
        name: Name of the page being checked (for logging)
        url: URL of the page to check
        current_year: Latest acceptable election year (defaults to this year)

    Returns:
        bool: True if structure check passes, False otherwise
    """
    logger.info(f"--- Checking Structure: {name} ({url}) ---")
    try:
        html_content = fetch_page(url)
    except PageFetchError as e:
        logger.error(f"Failed to fetch HTML content for {name}: {e}. Structure check failed.")
        return False

    if current_year is None:
        current_year = datetime.now().year

    soup = BeautifulSoup(html_content, 'html.parser')
    issues_found: List[str] = []

    # 1. Check for section headings
    headings = soup.find_all(SECTION_HEADING_SELECTOR)
    if not headings:
        issues_found.append(f"No section heading tags ({SECTION_HEADING_SELECTOR}) found.")
    else:
        logger.info(f"Found {len(headings)} section heading tags.")
        # 2. Check that at least one heading carries a valid election year
        years = [extract_heading_year(h.get_text()) for h in headings]
        valid_years = [y for y in years if y is not None and is_valid_election_year(y, current_year)]
        if not valid_years:
            issues_found.append("No heading contains a valid election year.")
        else:
            logger.info(f"Found election years: {sorted(set(valid_years))}")

    # 3. Check for tables with data rows of the expected width
    tables = soup.find_all('table')
    if not tables:
        issues_found.append("No tables found.")
    else:
        data_rows = [
            row for table in tables for row in table.find_all('tr')[1:]
            if len(row.find_all('td')) >= ROW_CELL_COUNT
        ]
        if not data_rows:
            issues_found.append(f"No table rows with at least {ROW_CELL_COUNT} cells found.")
        else:
            logger.info(f"Found {len(tables)} tables with {len(data_rows)} data rows.")

    # --- Report Results ---
    if issues_found:
        logger.error(f"Structure Check FAILED for {name} ({url})")
        for issue in issues_found:
            logger.error(f"  - {issue}")
        return False

    logger.info(f"Structure Check PASSED for {name} ({url})")
    return True


# --- Main Execution ---
def main(args: Optional[argparse.Namespace] = None) -> int:
    """Check every monitored page.

    Returns:
        int: 0 if all checks pass, 1 if any check fails
    """
    if args is None:
        parser = argparse.ArgumentParser(
            description="Monitor the Diet stance results pages for structure changes.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        parser.add_argument('--data-dir', type=str, default=None,
                            help='Override base data directory (default: ./data)')
        args = parser.parse_args()
        paths = setup_project_paths(args.data_dir)
        setup_logging(MONITOR_LOG_FILE, paths['log'])

    logger.info("=" * 50)
    logger.info("Starting Results Page Structure Monitor")
    logger.info("=" * 50)

    all_passed = True
    for name, url in MONITOR_TARGETS.items():
        if not check_page_structure(name, url):
            all_passed = False

    if all_passed:
        logger.info("All structure checks PASSED.")
        return 0
    logger.error("Some structure checks FAILED. Please review the logs.")
    return 1


if __name__ == "__main__":
    exit(main())
