"""Setup run journal.

Every ``wpssl setup`` run is recorded step by step: which ``[n/N]`` steps
completed, which one failed and why, and how long each took. When the run
ends (successfully, by error, or by Ctrl-C) the whole run is appended to a
JSONL file under ``log_dir`` and stored in SQLite, where ``wpssl history``
reads it back.
"""

from __future__ import annotations

import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from rich.console import Console

from wpssl_common import DistributionInfo, Outcome, SetupParameters, SetupRun, StepRecord, WpsslConfig
from wpssl_common.config import get_config

from wpssl.services import shell

console = Console()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS setup_runs (
    run_id TEXT PRIMARY KEY,
    started_at TEXT NOT NULL,
    host_id TEXT NOT NULL,
    operator TEXT NOT NULL,
    domain TEXT NOT NULL,
    site_dir TEXT NOT NULL,
    distro TEXT NOT NULL,
    status TEXT NOT NULL,
    failed_step INTEGER,
    error TEXT,
    duration_ms INTEGER
);
CREATE TABLE IF NOT EXISTS setup_steps (
    run_id TEXT NOT NULL REFERENCES setup_runs(run_id),
    number INTEGER NOT NULL,
    title TEXT NOT NULL,
    status TEXT NOT NULL,
    error TEXT,
    duration_ms INTEGER,
    PRIMARY KEY (run_id, number)
);
CREATE INDEX IF NOT EXISTS idx_setup_runs_domain ON setup_runs(domain);
"""


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class SetupJournal:
    """Numbers and prints pipeline steps while recording their outcome on *run*."""

    def __init__(self, run: SetupRun, total: int):
        self.run = run
        self.total = total

    @contextmanager
    def step(self, title: str) -> Generator[StepRecord, None, None]:
        record = StepRecord(number=len(self.run.steps) + 1, title=title)
        self.run.steps.append(record)
        console.print(f"[bold][{record.number}/{self.total}][/bold] {title}")

        start = time.monotonic()
        try:
            yield record
            record.status = Outcome.COMPLETED
        except BaseException as exc:
            record.status = Outcome.FAILED
            record.error = _describe(exc)
            raise
        finally:
            record.duration_ms = _elapsed_ms(start)


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.executescript(_SCHEMA)
    return conn


def _write_sqlite(db_path: Path, run: SetupRun) -> None:
    failed = run.failed_step
    conn = _connect(db_path)
    try:
        with conn:
            conn.execute(
                """INSERT OR REPLACE INTO setup_runs
                   (run_id, started_at, host_id, operator, domain, site_dir, distro,
                    status, failed_step, error, duration_ms)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    run.run_id,
                    run.started_at.isoformat(),
                    run.host_id,
                    run.operator,
                    run.domain,
                    run.site_dir,
                    run.distro,
                    run.status.value,
                    failed.number if failed else None,
                    run.error,
                    run.duration_ms,
                ),
            )
            conn.execute("DELETE FROM setup_steps WHERE run_id = ?", (run.run_id,))
            conn.executemany(
                """INSERT INTO setup_steps (run_id, number, title, status, error, duration_ms)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                [
                    (run.run_id, s.number, s.title, s.status.value, s.error, s.duration_ms)
                    for s in run.steps
                ],
            )
    finally:
        conn.close()


def save_run(run: SetupRun, cfg: WpsslConfig) -> None:
    """Append *run* to the JSONL journal and store it in SQLite."""
    cfg.log_dir.mkdir(parents=True, exist_ok=True)
    cfg.journal_db_path.parent.mkdir(parents=True, exist_ok=True)
    with open(cfg.journal_path, "a") as f:
        f.write(run.to_jsonl() + "\n")
    _write_sqlite(cfg.journal_db_path, run)


def recent_runs(cfg: WpsslConfig, limit: int = 20) -> list[sqlite3.Row]:
    """Newest runs first, with the title of the step that failed (if any)."""
    if not cfg.journal_db_path.exists():
        return []
    conn = _connect(cfg.journal_db_path)
    conn.row_factory = sqlite3.Row
    try:
        return conn.execute(
            """SELECT r.started_at, r.domain, r.site_dir, r.distro, r.status,
                      r.failed_step, s.title AS failed_title, r.error, r.duration_ms
               FROM setup_runs r
               LEFT JOIN setup_steps s
                 ON s.run_id = r.run_id AND s.number = r.failed_step
               ORDER BY r.started_at DESC
               LIMIT ?""",
            (limit,),
        ).fetchall()
    finally:
        conn.close()


@contextmanager
def record_setup(
    params: SetupParameters,
    dist: DistributionInfo,
    base_dir: Path,
    total: int,
) -> Generator[SetupJournal, None, None]:
    """Journal one setup run. The run is saved even when a step raises."""
    cfg = get_config()
    run = SetupRun(
        host_id=cfg.host_id,
        operator=shell.invoking_user(),
        domain=params.domain,
        site_dir=str(base_dir),
        distro=dist.id,
    )
    start = time.monotonic()
    try:
        yield SetupJournal(run, total)
        run.status = Outcome.COMPLETED
    except BaseException as exc:
        run.status = Outcome.FAILED
        run.error = _describe(exc)
        raise
    finally:
        run.duration_ms = _elapsed_ms(start)
        save_run(run, cfg)
