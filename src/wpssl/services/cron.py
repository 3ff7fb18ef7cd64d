"""Crontab access for the invoking (root) user."""

from __future__ import annotations

import shlex
from pathlib import Path

from wpssl.services import shell


def format_entry(schedule: str, script: Path) -> str:
    # cron turns a bare % in the command field into a newline
    command = shlex.quote(str(script)).replace("%", "\\%")
    return f"{schedule} {command}"


def read_crontab() -> str:
    """Current crontab contents; empty if the user has none yet."""
    result = shell.run(["crontab", "-l"], check=False)
    return result.stdout if result.returncode == 0 else ""


def append_entry(line: str) -> None:
    """Append *line* to the crontab. Existing identical entries are kept as-is."""
    lines = read_crontab().splitlines() + [line]
    shell.run(["crontab", "-"], input="\n".join(lines) + "\n")
