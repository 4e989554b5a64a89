# src/diet_stances/utils.py
"""Common utilities used across the Diet stance scraper."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from .config import FETCH_MAX_ATTEMPTS, FETCH_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# Callable that receives structured pipeline events: (event_name, fields)
EventSink = Callable[[str, Dict[str, Any]], None]


# --- Custom Exceptions ---
class PageFetchError(Exception):
    """Raised when a source page cannot be retrieved (transport error or non-success status)."""

    def __init__(self, url: str, status_code: Optional[int] = None, detail: str = ''):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"HTTP error {status_code} fetching {url}"
        else:
            message = f"Failed to fetch {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# --- Logging Setup ---
def setup_logging(log_file_name: str, log_dir: Path, level=logging.INFO, mode='w') -> logging.Logger:
    """Configure the package logger, saving to a file in log_dir as well as stdout."""
    log_file_path = log_dir / log_file_name
    log_file_path.parent.mkdir(parents=True, exist_ok=True) # Ensure log directory exists

    # Configure the package logger so every module logger (diet_stances.*) inherits the handlers
    package_logger = logging.getLogger('diet_stances')
    package_logger.setLevel(level)

    # Avoid duplicate logs if setup_logging is called more than once
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file_path, mode=mode, encoding='utf-8')
    stream_handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(formatter)
    stream_handler.setFormatter(formatter)

    package_logger.addHandler(file_handler)
    package_logger.addHandler(stream_handler)
    package_logger.propagate = False

    package_logger.info(f"Logging initialized. Level: {logging.getLevelName(package_logger.level)}. Log file: {log_file_path}")
    return package_logger


def emit_event(
    event_logger: logging.Logger,
    event_sink: Optional[EventSink],
    name: str,
    level: int = logging.DEBUG,
    **fields: Any
) -> None:
    """Log a structured pipeline event and forward it to the optional sink."""
    details = ', '.join(f"{key}={value!r}" for key, value in fields.items())
    event_logger.log(level, f"[{name}] {details}", extra={'event': name, 'fields': fields})
    if event_sink is not None:
        event_sink(name, fields)


# --- Network Operations ---
DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'ja,en-US;q=0.9,en;q=0.8',
    'Connection': 'keep-alive',
}


@retry(
    stop=stop_after_attempt(FETCH_MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=1.5, min=3, max=45),
    retry=retry_if_exception_type((requests.exceptions.Timeout, requests.exceptions.ConnectionError)),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def _get_with_retries(url: str, headers: Dict[str, str], timeout: int) -> requests.Response:
    """GET a URL, retrying only on timeouts and connection errors."""
    with requests.Session() as session:
        session.headers.update(headers)
        return session.get(url, timeout=timeout, allow_redirects=True)


def fetch_page(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = FETCH_TIMEOUT_SECONDS
) -> str:
    """Fetch a page's HTML with retries.

    Args:
        url: The URL to fetch
        headers: Optional HTTP headers to add to or override the defaults
        timeout: Request timeout in seconds

    Returns:
        The decoded response text

    Raises:
        PageFetchError: On a non-success HTTP status, or a transport error that
            persists after retries
    """
    request_headers = DEFAULT_HEADERS.copy()
    if headers:
        request_headers.update(headers)

    logger.info(f"Fetching URL (GET): {url}")
    try:
        response = _get_with_retries(url, request_headers, timeout)
    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout ({timeout}s) occurred while fetching {url}, giving up after retries.")
        raise PageFetchError(url, detail='timeout') from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request exception fetching {url}: {str(e)}")
        raise PageFetchError(url, detail=str(e)) from e

    if not response.ok:
        logger.error(f"HTTP error {response.status_code} received for {url}. Response text (first 500 chars): {response.text[:500]}")
        raise PageFetchError(url, status_code=response.status_code)

    # The source pages are UTF-8; requests falls back to ISO-8859-1 for text/html without a charset
    if not response.encoding or response.encoding.lower() == 'iso-8859-1':
        response.encoding = response.apparent_encoding or 'utf-8'

    text_content = response.text
    logger.debug(f"Decoded text (approx {len(text_content)} chars) from {url} using encoding '{response.encoding}'.")
    if len(text_content) < 200: # Heuristic for small text pages
        logger.warning(f"Small text response received from {url} ({len(text_content)} chars). May indicate error or empty data.")
    return text_content


# --- Path Management ---
def setup_project_paths(base_dir_override: Optional[Union[str, Path]] = None) -> Dict[str, Path]:
    """Setup and return project directory structure, creating directories."""
    # Import config locally to avoid potential circular imports at module level
    from .config import DEFAULT_BASE_DATA_DIR, LOG_SUBDIR, OUTPUT_SUBDIR

    if base_dir_override:
        base_dir = Path(base_dir_override).resolve()
    else:
        base_dir = DEFAULT_BASE_DATA_DIR.resolve()

    output_dir = base_dir / OUTPUT_SUBDIR
    log_dir = base_dir / LOG_SUBDIR

    for dir_path in (base_dir, output_dir, log_dir):
        dir_path.mkdir(parents=True, exist_ok=True)

    return {
        'base': base_dir,
        'output': output_dir,
        'log': log_dir,
    }
