"""Tests for the setup run journal."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from wpssl_common import DistributionInfo, Outcome, SetupParameters, SetupRun, WpsslConfig
from wpssl.errors import ExternalToolError
from wpssl.journal import SetupJournal, recent_runs, record_setup, save_run

UBUNTU = DistributionInfo(id="ubuntu", version="22.04")


def _journal_lines(cfg: WpsslConfig) -> list[dict]:
    return [json.loads(line) for line in cfg.journal_path.read_text().splitlines()]


class TestSetupJournal:
    def test_numbers_steps_in_order(self, capsys):
        journal = SetupJournal(SetupRun(domain="example.com", site_dir="/x", distro="ubuntu"), total=3)
        with journal.step("Checking ports") as first:
            pass
        with journal.step("Installing Docker") as second:
            pass

        assert (first.number, second.number) == (1, 2)
        assert all(s.status is Outcome.COMPLETED for s in journal.run.steps)
        assert all(s.duration_ms is not None for s in journal.run.steps)
        out = capsys.readouterr().out
        assert "[1/3] Checking ports" in out
        assert "[2/3] Installing Docker" in out

    def test_failed_step_keeps_error(self):
        journal = SetupJournal(SetupRun(domain="example.com", site_dir="/x", distro="ubuntu"), total=2)
        with pytest.raises(ExternalToolError):
            with journal.step("Installing Certbot"):
                raise ExternalToolError("Command failed: apt-get install -y certbot")

        step = journal.run.failed_step
        assert step.title == "Installing Certbot"
        assert step.error == "Command failed: apt-get install -y certbot"


class TestRecordSetup:
    def test_completed_run(self, tmp_config: WpsslConfig, params: SetupParameters, monkeypatch):
        monkeypatch.setenv("SUDO_USER", "alice")
        base = tmp_config.site_dir("mysite")
        with patch("wpssl.journal.get_config", return_value=tmp_config):
            with record_setup(params, UBUNTU, base, total=2) as journal:
                with journal.step("Checking ports"):
                    pass
                with journal.step("Starting Docker containers"):
                    pass

        [line] = _journal_lines(tmp_config)
        assert line["status"] == "completed"
        assert line["operator"] == "alice"
        assert line["host_id"] == "test-host"
        assert line["site_dir"] == str(base)
        assert [s["title"] for s in line["steps"]] == ["Checking ports", "Starting Docker containers"]
        assert "s3cret" not in tmp_config.journal_path.read_text()

    def test_failure_is_saved_and_reraised(self, tmp_config: WpsslConfig, params: SetupParameters):
        with patch("wpssl.journal.get_config", return_value=tmp_config):
            with pytest.raises(ExternalToolError):
                with record_setup(params, UBUNTU, tmp_config.site_dir("mysite"), total=3) as journal:
                    with journal.step("Checking ports"):
                        pass
                    with journal.step("Installing Docker"):
                        raise ExternalToolError("docker.io unavailable")

        [line] = _journal_lines(tmp_config)
        assert line["status"] == "failed"
        assert line["error"] == "docker.io unavailable"
        assert [s["status"] for s in line["steps"]] == ["completed", "failed"]

        conn = sqlite3.connect(str(tmp_config.journal_db_path))
        run_row = conn.execute("SELECT domain, status, failed_step FROM setup_runs").fetchone()
        step_rows = conn.execute("SELECT number, status FROM setup_steps ORDER BY number").fetchall()
        conn.close()
        assert run_row == ("example.com", "failed", 2)
        assert step_rows == [(1, "completed"), (2, "failed")]

    def test_interrupt_is_recorded(self, tmp_config: WpsslConfig, params: SetupParameters):
        with patch("wpssl.journal.get_config", return_value=tmp_config):
            with pytest.raises(KeyboardInterrupt):
                with record_setup(params, UBUNTU, tmp_config.site_dir("mysite"), total=1) as journal:
                    with journal.step("Obtaining SSL certificates"):
                        raise KeyboardInterrupt

        [line] = _journal_lines(tmp_config)
        assert line["status"] == "failed"
        assert line["steps"][0]["error"] == "KeyboardInterrupt"


class TestRecentRuns:
    def test_empty_without_database(self, tmp_config: WpsslConfig):
        assert recent_runs(tmp_config) == []

    def test_newest_first_with_failed_title(self, tmp_config: WpsslConfig):
        older = SetupRun(
            domain="old.com", site_dir="/var/www/old", distro="debian",
            started_at=datetime(2026, 3, 1, tzinfo=timezone.utc), status=Outcome.COMPLETED,
        )
        newer = SetupRun(
            domain="new.com", site_dir="/var/www/new", distro="fedora",
            started_at=datetime(2026, 3, 2, tzinfo=timezone.utc), status=Outcome.FAILED,
        )
        journal = SetupJournal(newer, total=3)
        with pytest.raises(ExternalToolError):
            with journal.step("Installing Certbot"):
                raise ExternalToolError("no certbot")
        save_run(older, tmp_config)
        save_run(newer, tmp_config)

        rows = recent_runs(tmp_config)
        assert [r["domain"] for r in rows] == ["new.com", "old.com"]
        assert rows[0]["failed_step"] == 1
        assert rows[0]["failed_title"] == "Installing Certbot"
        assert rows[1]["failed_title"] is None

    def test_resaving_replaces_run(self, tmp_config: WpsslConfig):
        run = SetupRun(domain="example.com", site_dir="/x", distro="arch")
        save_run(run, tmp_config)
        run.status = Outcome.COMPLETED
        save_run(run, tmp_config)

        rows = recent_runs(tmp_config)
        assert len(rows) == 1
        assert rows[0]["status"] == "completed"
