"""Read the list of URLs to audit from the input CSV."""

import csv
import logging
from pathlib import Path
from typing import Union

from lighthouse_batch.constants import INPUT_CSV, URL_COLUMN
from lighthouse_batch.exceptions import UrlSourceError

logger = logging.getLogger(__name__)


def read_urls(path: Union[str, Path] = INPUT_CSV, column: str = URL_COLUMN) -> tuple[str, ...]:
    """Read every URL from the input CSV.

    The whole file is consumed before anything is returned. Rows without
    the column (or with an empty value) are skipped; duplicates are kept
    and file order is preserved.

    Args:
        path: Path to the CSV file (header row required)
        column: Name of the column holding the URL

    Returns:
        Tuple of URL strings in row order

    Raises:
        UrlSourceError: If the file cannot be read
    """
    csv_path = Path(path)
    urls = []

    try:
        with open(csv_path, "r", newline="", encoding="utf-8-sig") as f:
            for row in csv.DictReader(f):
                url = row.get(column)
                if url:
                    urls.append(url)
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        raise UrlSourceError(f"Could not read URLs from {csv_path}: {e}") from e

    logger.info("CSV file successfully processed")
    logger.debug(f"Read {len(urls)} URLs from {csv_path}")
    return tuple(urls)
