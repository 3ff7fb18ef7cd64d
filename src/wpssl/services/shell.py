"""Subprocess wrapper shared by every external-tool service."""

from __future__ import annotations

import getpass
import os
import shutil
import subprocess

from wpssl.errors import ExternalToolError


def run(
    cmd: list[str],
    *,
    check: bool = True,
    capture: bool = True,
    input: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *cmd*; a non-zero exit raises ExternalToolError when *check* is set."""
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            text=True,
            input=input,
        )
    except subprocess.CalledProcessError as exc:
        raise ExternalToolError(
            f"Command failed: {' '.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise ExternalToolError(f"Command not found: {cmd[0]}") from exc


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def invoking_user() -> str:
    """The account that ran sudo, or the current login when run as root directly."""
    return os.environ.get("SUDO_USER") or getpass.getuser()
