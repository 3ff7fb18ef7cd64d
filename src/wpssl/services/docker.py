"""Docker engine and Compose subprocess wrappers."""

from __future__ import annotations

import os
import platform
from pathlib import Path

import httpx

from wpssl_common.constants import (
    COMPOSE_BINARY,
    COMPOSE_DOWNLOAD_URL,
    COMPOSE_RELEASES_API,
    COMPOSE_SYMLINK,
    DOCKER_GROUP,
)

from wpssl.errors import ExternalToolError
from wpssl.services import shell, systemd


def _plugin_available() -> bool:
    if not shell.command_exists("docker"):
        return False
    result = shell.run(["docker", "compose", "version"], check=False)
    return result.returncode == 0


def compose_available() -> bool:
    """True if either the standalone binary or the Compose plugin is usable."""
    return shell.command_exists("docker-compose") or _plugin_available()


def compose_command() -> list[str]:
    """Resolve the Compose invocation, preferring the standalone binary."""
    if shell.command_exists("docker-compose"):
        return ["docker-compose"]
    if _plugin_available():
        return ["docker", "compose"]
    raise ExternalToolError("Neither docker-compose nor the docker compose plugin is available")


def compose_up(compose_file: Path) -> None:
    shell.run([*compose_command(), "-f", str(compose_file), "up", "-d", "--build"], capture=False)


def compose_down(compose_file: Path, *, check: bool = True) -> None:
    shell.run([*compose_command(), "-f", str(compose_file), "down"], check=check)


def ensure_service() -> None:
    """Start the Docker daemon now and on every boot."""
    systemd.start("docker")
    systemd.enable("docker")


def ensure_group_member(user: str) -> bool:
    """Add *user* to the docker group unless already a member. Returns True if added."""
    result = shell.run(["id", "-nG", user], check=False)
    if result.returncode == 0 and DOCKER_GROUP in result.stdout.split():
        return False
    shell.run(["usermod", "-aG", DOCKER_GROUP, user])
    return True


def latest_compose_tag(client: httpx.Client) -> str:
    response = client.get(COMPOSE_RELEASES_API)
    response.raise_for_status()
    tag = response.json().get("tag_name")
    if not tag:
        raise ExternalToolError("GitHub did not report a Compose release tag")
    return tag


def install_compose_binary(
    client: httpx.Client | None = None,
    *,
    target: Path = COMPOSE_BINARY,
    symlink: Path = COMPOSE_SYMLINK,
) -> str:
    """Download the latest standalone Compose release. Returns the installed tag."""
    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=60, follow_redirects=True)
    try:
        tag = latest_compose_tag(client)
        url = COMPOSE_DOWNLOAD_URL.format(
            tag=tag,
            system=platform.system(),
            machine=platform.machine(),
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with open(target, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
    except httpx.HTTPError as exc:
        raise ExternalToolError(f"Docker Compose download failed: {exc}") from exc
    finally:
        if own_client:
            client.close()

    target.chmod(0o755)
    if symlink != target:
        if symlink.is_symlink() or symlink.exists():
            symlink.unlink()
        os.symlink(target, symlink)
    return tag


def ensure_compose() -> str | None:
    """Install the standalone Compose binary if no Compose tool is usable.

    Returns the installed release tag, or None if one was already present.
    """
    if compose_available():
        return None
    return install_compose_binary()
