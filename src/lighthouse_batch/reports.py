"""Storage of per-URL Lighthouse HTML reports."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from lighthouse_batch.constants import REPORT_DIR
from lighthouse_batch.models import iso_timestamp

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"https?://")
_UNSAFE_CHARS_RE = re.compile(r'[/\\?%*:|"<>]')


def sanitize_url(url: str) -> str:
    """Turn a URL into a filename fragment.

    The first http:// or https:// is dropped, the rest is percent-encoded
    like JavaScript's encodeURIComponent, and characters that are unsafe in
    file names (including the % of the escapes) become '-'.
    """
    stripped = _SCHEME_RE.sub("", url, count=1)
    encoded = quote(stripped, safe="!~*'()")
    return _UNSAFE_CHARS_RE.sub("-", encoded)


def sanitize_timestamp(timestamp: str) -> str:
    return timestamp.replace(":", "-")


class ReportStore:
    """Writes Lighthouse HTML reports into a single directory."""

    def __init__(self, report_dir: Union[str, Path] = REPORT_DIR):
        """Initialize the report store.

        Args:
            report_dir: Directory that receives one HTML file per audited URL
        """
        self.report_dir = Path(report_dir)

    def ensure_directory(self) -> Path:
        """Create the report directory if it does not exist yet."""
        self.report_dir.mkdir(parents=True, exist_ok=True)
        return self.report_dir

    def report_path(self, url: str, when: Optional[datetime] = None) -> Path:
        """Path of the report for `url` audited at `when` (UTC now by default).

        Example:
            https://example.com/a?b=1 at 2024-05-01T10:20:30.123Z ->
            lighthouse-reports/2024-05-01T10-20-30.123Z_example.com-2Fa-3Fb-3D1.html
        """
        timestamp = sanitize_timestamp(iso_timestamp(when))
        return self.report_dir / f"{timestamp}_{sanitize_url(url)}.html"

    def save(self, url: str, html: str, when: Optional[datetime] = None) -> Path:
        """Write the HTML report for a URL and return its absolute path."""
        path = self.report_path(url, when)
        path.write_text(html, encoding="utf-8")
        logger.debug(f"Saved report for {url} to {path}")
        return path.resolve()
