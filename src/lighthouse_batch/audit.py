"""
Per-URL audit: authentication check, a dedicated browser, Lighthouse, and
the saved report.

Each URL gets its own Chromium process. It is launched before Lighthouse
runs and closed before the next URL starts, on success and on failure.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from lighthouse_batch.auth import Authenticator
from lighthouse_batch.browser import BrowserConfig, ChromeSession
from lighthouse_batch.config import AuthType, RunConfig
from lighthouse_batch.lighthouse_runner import LighthouseRunner, extract_scores
from lighthouse_batch.models import AuditOutcome
from lighthouse_batch.reports import ReportStore

logger = logging.getLogger(__name__)


class AuditRunner:
    """Audits single URLs with Lighthouse."""

    def __init__(
        self,
        config: RunConfig,
        authenticator: Authenticator,
        lighthouse: Optional[LighthouseRunner] = None,
        report_store: Optional[ReportStore] = None,
        browser_config: Optional[BrowserConfig] = None,
    ):
        """
        Initialize the audit runner.

        Args:
            config: Run configuration
            authenticator: Performs the per-URL basic/digest checks
            lighthouse: Lighthouse CLI wrapper
            report_store: Destination for the HTML reports
            browser_config: Launch settings for the per-URL browser
        """
        self._config = config
        self._authenticator = authenticator
        self._lighthouse = lighthouse or LighthouseRunner()
        self._report_store = report_store or ReportStore()
        self._browser_config = browser_config

    async def run(self, url: str, session_token: Optional[str] = None) -> AuditOutcome:
        """
        Audit one URL.

        Args:
            url: URL to audit
            session_token: Cookie header value from page login, if any

        Returns:
            Successful AuditOutcome with scores and the absolute report path

        Raises:
            AuthenticationError: If the basic/digest check fails
            LighthouseError: If Lighthouse fails or returns incomplete scores
        """
        if self._config.auth_type in (AuthType.BASIC, AuthType.DIGEST):
            await self._authenticator.check(url)

        extra_headers = {"Cookie": session_token} if session_token else None

        async with ChromeSession(self._browser_config, debugging_port=True) as chrome:
            try:
                report = await self._lighthouse.run(url, chrome.port, extra_headers)
            except Exception as e:
                logger.error(f"Lighthouse error for URL: {url}, Error: {e}")
                raise

            scores = extract_scores(report.lhr)
            report_path = self._report_store.save(url, report.html, datetime.now(timezone.utc))

        return AuditOutcome.success(url, scores, report_path)

    async def audit(self, url: str, session_token: Optional[str] = None) -> AuditOutcome:
        """Like run(), but any failure is returned as a failed AuditOutcome."""
        try:
            return await self.run(url, session_token)
        except Exception as e:
            return AuditOutcome.failure(url, str(e) or e.__class__.__name__)
