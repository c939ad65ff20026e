"""Tests for the Lighthouse CLI wrapper and score extraction."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lighthouse_batch.exceptions import LighthouseError
from lighthouse_batch.lighthouse_runner import LighthouseRunner, extract_scores

from conftest import make_lhr


def fake_process(returncode=0, stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(b"", stderr))
    return process


def writing_subprocess(lhr, html="<html>report</html>", returncode=0):
    """create_subprocess_exec replacement that writes Lighthouse's two outputs."""

    async def _exec(*cmd, **kwargs):
        output_arg = next(arg for arg in cmd if arg.startswith("--output-path="))
        base = Path(output_arg.split("=", 1)[1])
        base.with_name(base.name + ".report.json").write_text(json.dumps(lhr), encoding="utf-8")
        base.with_name(base.name + ".report.html").write_text(html, encoding="utf-8")
        return fake_process(returncode)

    return _exec


class TestBuildCommand:
    """Test cases for the CLI invocation."""

    def test_default_command(self, tmp_path):
        runner = LighthouseRunner()
        cmd = runner.build_command("https://a.test", 9222, tmp_path / "report")

        assert cmd[0] == "lighthouse"
        assert cmd[1] == "https://a.test"
        assert "--port=9222" in cmd
        assert "--output=json" in cmd
        assert "--output=html" in cmd
        assert f"--output-path={tmp_path / 'report'}" in cmd
        assert "--only-categories=performance,accessibility,best-practices,seo" in cmd
        assert not any(arg.startswith("--extra-headers") for arg in cmd)

    def test_extra_headers(self, tmp_path):
        runner = LighthouseRunner()
        cmd = runner.build_command(
            "https://a.test", 9222, tmp_path / "report", {"Cookie": "sid=abc; theme=dark"}
        )

        header_arg = next(arg for arg in cmd if arg.startswith("--extra-headers="))
        assert json.loads(header_arg.split("=", 1)[1]) == {"Cookie": "sid=abc; theme=dark"}

    def test_custom_command_and_categories(self, tmp_path):
        runner = LighthouseRunner(command=["npx", "lighthouse"], only_categories=["seo"])
        cmd = runner.build_command("https://a.test", 9000, tmp_path / "report")

        assert cmd[:3] == ["npx", "lighthouse", "https://a.test"]
        assert "--only-categories=seo" in cmd


class TestRun:
    """Test cases for running the CLI."""

    @pytest.mark.asyncio
    async def test_run_reads_outputs(self):
        lhr = make_lhr()
        with patch(
            "lighthouse_batch.lighthouse_runner.asyncio.create_subprocess_exec",
            side_effect=writing_subprocess(lhr, html="<html>ok</html>"),
        ):
            report = await LighthouseRunner().run("https://a.test", 9222)

        assert report.lhr == lhr
        assert report.html == "<html>ok</html>"

    @pytest.mark.asyncio
    async def test_nonzero_exit_raises(self):
        with patch(
            "lighthouse_batch.lighthouse_runner.asyncio.create_subprocess_exec",
            AsyncMock(return_value=fake_process(1, b"Runtime error encountered: NO_FCP")),
        ):
            with pytest.raises(LighthouseError, match="NO_FCP"):
                await LighthouseRunner().run("https://a.test", 9222)

    @pytest.mark.asyncio
    async def test_missing_outputs_raise(self):
        with patch(
            "lighthouse_batch.lighthouse_runner.asyncio.create_subprocess_exec",
            AsyncMock(return_value=fake_process(0)),
        ):
            with pytest.raises(LighthouseError, match="did not write a report"):
                await LighthouseRunner().run("https://a.test", 9222)

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        with patch(
            "lighthouse_batch.lighthouse_runner.asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("lighthouse")),
        ):
            with pytest.raises(LighthouseError, match="not found"):
                await LighthouseRunner(command=["lighthouse"]).run("https://a.test", 9222)


class TestExtractScores:
    """Test cases for extract_scores."""

    def test_scores_scaled_to_100(self):
        scores = extract_scores(make_lhr(0.9, 0.8, 1.0, 0.7))

        assert scores.performance == 90
        assert scores.accessibility == 80
        assert scores.best_practices == 100
        assert scores.seo == 70

    def test_scores_rounded(self):
        scores = extract_scores(make_lhr(0.567, 0.0, 0.333, 0.29))

        assert scores.performance == 56.7
        assert scores.accessibility == 0
        assert scores.best_practices == 33.3
        assert scores.seo == 29

    def test_null_score_recorded_as_zero(self):
        """Test a null category score becomes 0 and the others are kept."""
        scores = extract_scores(make_lhr(performance=None))

        assert scores.performance == 0
        assert scores.accessibility == 80
        assert scores.best_practices == 100
        assert scores.seo == 70

    def test_missing_category_raises(self):
        lhr = make_lhr()
        del lhr["categories"]["seo"]

        with pytest.raises(LighthouseError, match="seo"):
            extract_scores(lhr)

    def test_no_categories(self):
        with pytest.raises(LighthouseError):
            extract_scores({})
