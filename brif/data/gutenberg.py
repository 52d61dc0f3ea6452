"""
Loading book text from Project Gutenberg or local files.

Gutenberg plain-text releases wrap the book in a license header and footer
delimited by ``*** START OF ... ***`` / ``*** END OF ... ***`` lines; only the
part between them is the book.
"""

import re
from pathlib import Path
from typing import Union

import requests

from ..exceptions import SourceFetchError
from ..logging_config import get_logger

logger = get_logger(__name__)

BOUNDARY_PATTERN = re.compile(r"\*\*\* .+ \*\*\*")


def fetch_text(url: str, timeout: float = 30) -> str:
    """
    Download a plain-text document.

    Raises:
        SourceFetchError: If the request fails or the status is not 200
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise SourceFetchError(f"Failed to fetch {url}: {e}") from e

    if response.status_code != 200:
        raise SourceFetchError(f"Failed to fetch book text from {url}: HTTP {response.status_code}")

    # Gutenberg serves UTF-8 without always declaring a charset
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    return response.text


def extract_book_body(text: str) -> str:
    """
    Strip carriage returns and the Gutenberg header/footer.

    Raises:
        SourceFetchError: If the text has fewer than three marker-separated parts
    """
    text = text.replace("\r", "")
    parts = BOUNDARY_PATTERN.split(text)

    logger.info(f"Divided into parts of length: {[len(part) for part in parts]}")

    if len(parts) < 3:
        raise SourceFetchError(f"Expected at least 3 parts after splitting on Gutenberg markers, got {len(parts)}")

    return parts[1]


def load_book(url: str, timeout: float = 30) -> str:
    """Fetch a Gutenberg book and return only its body."""
    book = extract_book_body(fetch_text(url, timeout=timeout))
    logger.info(f"Text contains {len(book)} characters")
    return book


def load_text_file(path: Union[str, Path], gutenberg: bool = False) -> str:
    """
    Read a local document.

    Args:
        path: Path to a UTF-8 text file
        gutenberg: Whether to strip Gutenberg header/footer markers

    Raises:
        SourceFetchError: If the file cannot be read
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SourceFetchError(f"Failed to read {path}: {e}") from e
    return extract_book_body(text) if gutenberg else text
