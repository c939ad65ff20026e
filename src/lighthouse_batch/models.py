"""Data models for batch audit results."""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from lighthouse_batch.constants import ERROR_MARKER


def iso_timestamp(when: Optional[datetime] = None) -> str:
    """Format a UTC timestamp as ISO-8601 with milliseconds and a Z suffix.

    Example: 2024-05-01T10:20:30.123Z
    """
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class CategoryScores:
    """Lighthouse category scores on a 0-100 scale."""

    performance: float
    accessibility: float
    best_practices: float
    seo: float

    def to_dict(self) -> dict[str, float]:
        return {
            "Performance": self.performance,
            "Accessibility": self.accessibility,
            "BestPractices": self.best_practices,
            "SEO": self.seo,
        }


@dataclass(frozen=True)
class AuditOutcome:
    """Result of auditing a single URL: either scores and a report, or an error."""

    url: str
    scores: Optional[CategoryScores] = None
    report_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.scores is not None

    @classmethod
    def success(cls, url: str, scores: CategoryScores, report_path: Path) -> "AuditOutcome":
        return cls(url=url, scores=scores, report_path=report_path)

    @classmethod
    def failure(cls, url: str, error: str) -> "AuditOutcome":
        return cls(url=url, error=error)


Score = Union[float, str]


@dataclass(frozen=True)
class AuditResultRow:
    """One row of the output table."""

    timestamp: str
    url: str
    performance: Score
    accessibility: Score
    best_practices: Score
    seo: Score
    report: Union[Path, str]

    @property
    def failed(self) -> bool:
        return self.report == ERROR_MARKER

    @classmethod
    def from_outcome(cls, outcome: AuditOutcome, timestamp: Optional[str] = None) -> "AuditResultRow":
        """Build the row for an outcome; failed outcomes get the Error marker everywhere."""
        timestamp = timestamp or iso_timestamp()
        if not outcome.ok:
            return cls(
                timestamp=timestamp,
                url=outcome.url,
                performance=ERROR_MARKER,
                accessibility=ERROR_MARKER,
                best_practices=ERROR_MARKER,
                seo=ERROR_MARKER,
                report=ERROR_MARKER,
            )

        scores = outcome.scores
        return cls(
            timestamp=timestamp,
            url=outcome.url,
            performance=scores.performance,
            accessibility=scores.accessibility,
            best_practices=scores.best_practices,
            seo=scores.seo,
            report=outcome.report_path,
        )
