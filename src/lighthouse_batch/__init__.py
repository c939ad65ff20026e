"""Batch Lighthouse auditing of URLs listed in a CSV file."""

__version__ = "0.1.0"

from lighthouse_batch.audit import AuditRunner
from lighthouse_batch.auth import Authenticator
from lighthouse_batch.batch import BatchAuditor, BatchPaths, run_batch
from lighthouse_batch.browser import BrowserConfig, ChromeSession
from lighthouse_batch.config import AuthType, RunConfig, load_config
from lighthouse_batch.exceptions import (
    AuthenticationError,
    ConfigError,
    LighthouseBatchError,
    LighthouseError,
    UrlSourceError,
)
from lighthouse_batch.lighthouse_runner import LighthouseReport, LighthouseRunner
from lighthouse_batch.models import AuditOutcome, AuditResultRow, CategoryScores
from lighthouse_batch.reports import ReportStore
from lighthouse_batch.results_writer import ResultsWriter
from lighthouse_batch.url_source import read_urls

__all__ = [
    # Core
    "AuditRunner",
    "Authenticator",
    "BatchAuditor",
    "BatchPaths",
    "run_batch",
    "LighthouseRunner",
    "ReportStore",
    "ResultsWriter",
    "read_urls",
    # Configuration
    "AuthType",
    "RunConfig",
    "load_config",
    "BrowserConfig",
    "ChromeSession",
    # Models
    "AuditOutcome",
    "AuditResultRow",
    "CategoryScores",
    "LighthouseReport",
    # Errors
    "LighthouseBatchError",
    "ConfigError",
    "UrlSourceError",
    "AuthenticationError",
    "LighthouseError",
]
