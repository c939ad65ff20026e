"""
Lighthouse Runner

Runs Google Lighthouse via CLI against an already running Chrome (attached
through its remote debugging port) and returns the JSON result together
with the rendered HTML report.
"""

import asyncio
import json
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from lighthouse_batch.constants import LIGHTHOUSE_CATEGORIES
from lighthouse_batch.exceptions import LighthouseError
from lighthouse_batch.models import CategoryScores

logger = logging.getLogger(__name__)


@dataclass
class LighthouseReport:
    """Output of one Lighthouse run."""

    lhr: Dict[str, Any]  # Lighthouse Result JSON
    html: str


class LighthouseRunner:
    """Runs Lighthouse audits and parses results."""

    def __init__(
        self,
        command: Optional[List[str]] = None,
        only_categories: Optional[List[str]] = None,
    ):
        """
        Initialize the Lighthouse runner.

        Args:
            command: Executable (and leading args) used to start Lighthouse
            only_categories: Categories to run (performance, accessibility, best-practices, seo)
        """
        self.command = command or ["lighthouse"]
        self.only_categories = only_categories or list(LIGHTHOUSE_CATEGORIES)

    def build_command(
        self,
        url: str,
        port: int,
        output_path: Path,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> List[str]:
        """Build the Lighthouse CLI invocation for one URL."""
        cmd = [
            *self.command,
            url,
            f"--port={port}",
            "--output=json",
            "--output=html",
            f"--output-path={output_path}",
            "--quiet",
        ]

        if self.only_categories:
            cmd.append("--only-categories=" + ",".join(self.only_categories))

        if extra_headers:
            cmd.append("--extra-headers=" + json.dumps(extra_headers))

        return cmd

    async def run(
        self,
        url: str,
        port: int,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> LighthouseReport:
        """
        Run Lighthouse on a URL using the Chrome listening on `port`.

        Args:
            url: The URL to audit
            port: Remote debugging port of the Chrome instance to drive
            extra_headers: HTTP headers added to every request Lighthouse makes

        Returns:
            LighthouseReport with the parsed JSON result and the HTML report

        Raises:
            LighthouseError: If Lighthouse exits with an error or writes no report
        """
        logger.info(f"Running Lighthouse for URL: {url}")

        with tempfile.TemporaryDirectory(prefix="lighthouse-") as tmp_dir:
            cmd = self.build_command(url, port, Path(tmp_dir) / "report", extra_headers)

            try:
                process = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise LighthouseError(f"Lighthouse executable not found: {self.command[0]}") from e

            _, stderr = await process.communicate()

            if process.returncode != 0:
                message = stderr.decode("utf-8", errors="replace").strip()
                raise LighthouseError(
                    f"Lighthouse exited with code {process.returncode}: {message}"
                )

            report = self._read_outputs(Path(tmp_dir))

        logger.info(f"Lighthouse completed successfully for {url}")
        return report

    def _read_outputs(self, output_dir: Path) -> LighthouseReport:
        """Load the JSON and HTML files Lighthouse wrote into output_dir."""
        json_files = sorted(output_dir.glob("*.json"))
        html_files = sorted(output_dir.glob("*.html"))
        if not json_files or not html_files:
            raise LighthouseError(f"Lighthouse did not write a report to {output_dir}")

        try:
            with open(json_files[0], "r", encoding="utf-8") as f:
                lhr = json.load(f)
        except json.JSONDecodeError as e:
            raise LighthouseError(f"Unreadable Lighthouse result: {e}") from e

        html = html_files[0].read_text(encoding="utf-8")
        return LighthouseReport(lhr=lhr, html=html)


def _get_score(categories: Dict[str, Any], category_id: str) -> float:
    """Extract a category score (0-1) and convert to 0-100.

    Lighthouse reports a null score when a category could not be computed
    (e.g. no LCP on the page); that is recorded as 0.
    """
    category = categories.get(category_id)
    if not category:
        raise LighthouseError(f"Lighthouse result has no '{category_id}' category")
    score = category.get("score")
    if score is None:
        logger.warning(f"Lighthouse returned a null '{category_id}' score, recording 0")
        return 0.0
    return round(score * 100, 1)


def extract_scores(lhr: Dict[str, Any]) -> CategoryScores:
    """
    Pull the four category scores out of a Lighthouse result.

    Args:
        lhr: Lighthouse report JSON (lhr = Lighthouse Result)

    Returns:
        CategoryScores on a 0-100 scale

    Raises:
        LighthouseError: If a category is missing from the result
    """
    categories = lhr.get("categories", {})
    return CategoryScores(
        performance=_get_score(categories, "performance"),
        accessibility=_get_score(categories, "accessibility"),
        best_practices=_get_score(categories, "best-practices"),
        seo=_get_score(categories, "seo"),
    )
