"""Shared fixtures: fake browser sessions, a fake Lighthouse engine and file helpers."""

import csv
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lighthouse_batch.batch import BatchPaths
from lighthouse_batch.exceptions import LighthouseError
from lighthouse_batch.lighthouse_runner import LighthouseReport


def make_lhr(performance=0.9, accessibility=0.8, best_practices=1.0, seo=0.7):
    """Minimal Lighthouse result with the four audited categories."""
    return {
        "requestedUrl": "https://example.com",
        "categories": {
            "performance": {"id": "performance", "score": performance},
            "accessibility": {"id": "accessibility", "score": accessibility},
            "best-practices": {"id": "best-practices", "score": best_practices},
            "seo": {"id": "seo", "score": seo},
        },
    }


class FakeLighthouse:
    """Stands in for LighthouseRunner; records calls and fails for chosen URLs."""

    def __init__(self, lhr=None, fail_for=()):
        self.lhr = lhr or make_lhr()
        self.fail_for = set(fail_for)
        self.calls = []

    async def run(self, url, port, extra_headers=None):
        self.calls.append({"url": url, "port": port, "extra_headers": extra_headers})
        if url in self.fail_for:
            raise LighthouseError(f"Lighthouse exited with code 1: could not load {url}")
        return LighthouseReport(lhr=self.lhr, html=f"<html><body>Report for {url}</body></html>")


class FakeChromeSession:
    """Records launches and closes instead of starting Chromium."""

    def __init__(self, registry, config=None, debugging_port=False):
        self.config = config
        self.port = 9222 + len(registry) if debugging_port else None
        self.browser = MagicMock()
        self.entered = False
        self.closed = False
        registry.append(self)

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


@pytest.fixture
def chrome_sessions(monkeypatch):
    """Patch the per-URL browser used by AuditRunner; yields the launched sessions."""
    sessions = []

    def factory(config=None, debugging_port=False):
        return FakeChromeSession(sessions, config=config, debugging_port=debugging_port)

    monkeypatch.setattr("lighthouse_batch.audit.ChromeSession", factory)
    return sessions


@pytest.fixture
def write_config(tmp_path):
    """Write a config.json into tmp_path and return its path."""

    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_urls(tmp_path):
    """Write a Crawler.csv with a URL column into tmp_path and return its path."""

    def _write(urls, extra_columns=None):
        path = tmp_path / "Crawler.csv"
        fieldnames = ["URL"] + list(extra_columns or [])
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for url in urls:
                writer.writerow({"URL": url})
        return path

    return _write


@pytest.fixture
def batch_paths(tmp_path):
    return BatchPaths(
        config=tmp_path / "config.json",
        input_csv=tmp_path / "Crawler.csv",
        output_csv=tmp_path / "LighthouseResults.csv",
        report_dir=tmp_path / "lighthouse-reports",
    )


def read_results(path: Path):
    """Read the output CSV back as a list of dicts keyed by column title."""
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))
