"""
Batch orchestration: audit every URL from the input CSV, in order, and write
one result row per URL.

URLs are audited strictly one after another so that only one browser is
alive at a time and output order matches input order. A failure on one URL
produces an Error row and the batch moves on; only configuration, input and
page-login failures stop the run.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from lighthouse_batch.audit import AuditRunner
from lighthouse_batch.auth import Authenticator
from lighthouse_batch.browser import BrowserConfig
from lighthouse_batch.config import load_config
from lighthouse_batch.constants import CONFIG_FILE, INPUT_CSV, OUTPUT_CSV, REPORT_DIR
from lighthouse_batch.lighthouse_runner import LighthouseRunner
from lighthouse_batch.models import AuditOutcome, AuditResultRow
from lighthouse_batch.reports import ReportStore
from lighthouse_batch.results_writer import ResultsWriter
from lighthouse_batch.url_source import read_urls

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchPaths:
    """File locations used by a batch run."""

    config: Path = Path(CONFIG_FILE)
    input_csv: Path = Path(INPUT_CSV)
    output_csv: Path = Path(OUTPUT_CSV)
    report_dir: Path = Path(REPORT_DIR)


class BatchAuditor:
    """Runs the audit loop over a fixed list of URLs."""

    def __init__(
        self,
        urls: Sequence[str],
        auditor: AuditRunner,
        authenticator: Authenticator,
        writer: ResultsWriter,
    ):
        self._urls = tuple(urls)
        self._auditor = auditor
        self._authenticator = authenticator
        self._writer = writer

    async def run(self) -> List[AuditResultRow]:
        """
        Audit all URLs and write the results table.

        Returns:
            The rows written, one per input URL in input order

        Raises:
            AuthenticationError: If page login fails (nothing is written)
        """
        session_token = await self._authenticator.session_token()

        rows: List[AuditResultRow] = []
        for url in self._urls:
            outcome = await self._auditor.audit(url, session_token)
            rows.append(AuditResultRow.from_outcome(outcome))
            self._log_outcome(outcome)

        output_path = self._writer.write(rows)
        logger.info(f"Results written to {output_path}")
        return rows

    @staticmethod
    def _log_outcome(outcome: AuditOutcome) -> None:
        if outcome.ok:
            logger.info(
                f"Processed URL: {outcome.url}, Scores: {outcome.scores.to_dict()}, "
                f"Report: {outcome.report_path}"
            )
        else:
            logger.error(f"Error processing URL: {outcome.url}, Error: {outcome.error}")


async def run_batch(
    paths: Optional[BatchPaths] = None,
    browser_config: Optional[BrowserConfig] = None,
    lighthouse: Optional[LighthouseRunner] = None,
) -> List[AuditResultRow]:
    """Load config and URLs, then audit every URL and write the results.

    Args:
        paths: File locations (defaults to the files in the working directory)
        browser_config: Launch settings for every browser started by the run
        lighthouse: Lighthouse CLI wrapper

    Returns:
        The rows written to the output CSV

    Raises:
        ConfigError: If config.json is missing or invalid
        UrlSourceError: If the input CSV cannot be read
        AuthenticationError: If page login fails
    """
    paths = paths or BatchPaths()

    config = load_config(paths.config)

    report_store = ReportStore(paths.report_dir)
    report_store.ensure_directory()

    urls = read_urls(paths.input_csv)

    authenticator = Authenticator(config, browser_config=browser_config)
    auditor = AuditRunner(
        config,
        authenticator,
        lighthouse=lighthouse,
        report_store=report_store,
        browser_config=browser_config,
    )

    batch = BatchAuditor(urls, auditor, authenticator, ResultsWriter(paths.output_csv))
    return await batch.run()
