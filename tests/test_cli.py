"""Tests for the CLI interface."""

from __future__ import annotations

import json
import logging
import os

import pytest

from setblocks import _ops
from setblocks._cli import main
from setblocks._laws import LAWS
from setblocks._log import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


# ---------------------------------------------------------------------------
# CLI exit codes
# ---------------------------------------------------------------------------

class TestCLIExitCodes:
    def test_passing_laws_exit_zero(self, tmp_out):
        assert main(["--max-examples", "10", "--out", tmp_out, "--no-color"]) == 0

    def test_failing_law_exits_one(self, tmp_out, monkeypatch):
        monkeypatch.setattr(_ops, "select", lambda source, block: set(source))
        code = main(["--law", "select_reject_partition", "--max-examples", "50", "--out", tmp_out, "--no-color"])
        assert code == 1

    def test_invalid_max_examples(self, tmp_out):
        assert main(["--max-examples", "0", "--out", tmp_out, "--no-color"]) == 2

    def test_unknown_element_kind(self):
        with pytest.raises(SystemExit):
            main(["--elements", "list"])


# ---------------------------------------------------------------------------
# CLI output modes
# ---------------------------------------------------------------------------

class TestCLIOutputModes:
    def test_default_lists_every_law(self, tmp_out, capsys):
        main(["--max-examples", "5", "--out", tmp_out, "--no-color"])
        out = capsys.readouterr().out
        for name in LAWS:
            assert name in out
        assert "passed" in out

    def test_json_mode(self, tmp_out, capsys):
        main(["--max-examples", "5", "--out", tmp_out, "--json", "--no-color"])
        data = json.loads(capsys.readouterr().out)
        assert isinstance(data, list)
        assert len(data) == len(LAWS)
        for r in data:
            assert "law" in r
            assert "status" in r

    def test_quiet_mode(self, tmp_out, capsys):
        main(["--max-examples", "5", "--out", tmp_out, "-q", "--no-color"])
        out = capsys.readouterr().out
        assert "passed" in out
        assert "each_visits_once" not in out

    def test_verbose_shows_counterexample(self, tmp_out, capsys, monkeypatch):
        monkeypatch.setattr(_ops, "select", lambda source, block: set(source))
        main(["--law", "select_reject_partition", "--max-examples", "50", "--out", tmp_out, "-v", "--no-color"])
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "kwargs:" in out


# ---------------------------------------------------------------------------
# CLI report
# ---------------------------------------------------------------------------

class TestCLIReport:
    def test_writes_report(self, tmp_out):
        main(["--elements", "str", "--max-examples", "5", "--out", tmp_out, "--no-color"])
        with open(os.path.join(tmp_out, "laws.json"), encoding="utf-8") as f:
            report = json.load(f)
        assert report["elements"] == "str"
        assert len(report["laws"]) == len(LAWS)
        assert "timestamp" in report

    def test_no_report(self, tmp_out):
        main(["--max-examples", "5", "--out", tmp_out, "--no-report", "--no-color"])
        assert not os.path.exists(tmp_out)

    def test_single_law(self, tmp_out):
        main(["--law", "reduce_counts", "--max-examples", "5", "--out", tmp_out, "--no-color"])
        with open(os.path.join(tmp_out, "laws.json"), encoding="utf-8") as f:
            report = json.load(f)
        assert [r["law"] for r in report["laws"]] == ["reduce_counts"]
