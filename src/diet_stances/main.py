#!/usr/bin/env python3
"""Main entry point for scraping Diet members' stances and writing the results."""
import argparse
import logging
from typing import Dict, List, Optional

from tqdm import tqdm

from . import monitor_page_structure
from .config import MAIN_LOG_FILE
from .models import Chamber, PoliticianRecord
from .output import DirectorySink, OutputSink, write_outputs
from .stance_scraper import ChamberResult, scrape_chamber
from .utils import PageFetchError, setup_logging, setup_project_paths
from .validation import ScrapingStructureError

logger = logging.getLogger(__name__)

# Scraped one after the other, in this order
CHAMBERS: List[Chamber] = [Chamber.REPRESENTATIVES, Chamber.COUNCILLORS]


def run_pipeline(sink: OutputSink, chambers: Optional[List[Chamber]] = None) -> Dict[Chamber, ChamberResult]:
    """
    Scrape each chamber, write its outputs, then write the combined outputs.

    A chamber's files are written as soon as it succeeds, so a later failure
    leaves earlier chambers' files in place.

    Raises:
        PageFetchError: If a chamber page could not be fetched
        ScrapingStructureError: If a chamber page has an unexpected structure
    """
    chambers = chambers or CHAMBERS
    results: Dict[Chamber, ChamberResult] = {}

    for chamber in tqdm(chambers, desc="Scraping chambers", unit="chamber"):
        result = scrape_chamber(chamber)
        write_outputs(sink, result.records, chamber)
        results[chamber] = result

    all_records: List[PoliticianRecord] = [
        record for result in results.values() for record in result.records
    ]
    write_outputs(sink, all_records, Chamber.ALL)
    logger.info(f"Combined data for {len(all_records)} politicians saved")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape Diet members' stances on separate surnames and same-sex marriage",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--data-dir', type=str, default=None,
                        help='Override base data directory (default: ./data)')
    parser.add_argument('--monitor-only', action='store_true',
                        help='Only run results page structure monitoring')
    args = parser.parse_args(argv)

    paths = setup_project_paths(args.data_dir)
    setup_logging(MAIN_LOG_FILE, paths['log'])

    if args.monitor_only:
        return monitor_page_structure.main(args)

    logger.info("=== Starting Diet Stance Scrape ===")
    logger.info(f"Output Directory: {paths['output']}")

    try:
        results = run_pipeline(DirectorySink(paths['output']))
    except PageFetchError as e:
        logger.error(f"Fetch failed: {e}")
        return 1
    except ScrapingStructureError as e:
        logger.error(f"Unexpected page structure ({e.reason}): {e}")
        return 1

    warning_count = sum(len(result.warnings) for result in results.values())
    logger.info(f"=== Scrape Complete ({warning_count} warnings) ===")
    return 0


if __name__ == "__main__":
    exit(main())
