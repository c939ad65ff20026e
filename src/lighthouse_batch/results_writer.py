"""Write audit result rows to the output CSV."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Union

from lighthouse_batch.constants import ERROR_MARKER, OUTPUT_CSV, RESULT_COLUMNS
from lighthouse_batch.models import AuditResultRow, Score

logger = logging.getLogger(__name__)


def hyperlink(target: str) -> str:
    """Spreadsheet formula that shows `target` as a clickable link to itself."""
    return f'=HYPERLINK("{target}", "{target}")'


def format_score(value: Score) -> str:
    """Render a score cell; 90.0 becomes '90', markers pass through."""
    if isinstance(value, str):
        return value
    return f"{value:g}"


def row_to_record(row: AuditResultRow) -> Dict[str, str]:
    """Map a result row onto the output columns."""
    report = ERROR_MARKER if row.failed else hyperlink(str(row.report))
    return {
        "Timestamp": row.timestamp,
        "URL": hyperlink(row.url),
        "Performance": format_score(row.performance),
        "Accessibility": format_score(row.accessibility),
        "BestPractices": format_score(row.best_practices),
        "SEO": format_score(row.seo),
        "Report": report,
    }


class ResultsWriter:
    """Writes the final results table."""

    def __init__(self, path: Union[str, Path] = OUTPUT_CSV):
        self.path = Path(path)

    def write(self, rows: Iterable[AuditResultRow]) -> Path:
        """Write all rows (header first) and return the output path."""
        field_ids = list(RESULT_COLUMNS)

        with open(self.path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=field_ids)
            writer.writerow(RESULT_COLUMNS)
            count = 0
            for row in rows:
                writer.writerow(row_to_record(row))
                count += 1

        logger.debug(f"Wrote {count} rows to {self.path}")
        return self.path
