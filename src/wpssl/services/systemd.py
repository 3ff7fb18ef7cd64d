"""systemctl wrappers for host services."""

from __future__ import annotations

from wpssl_common import DistroFamily

from wpssl.services import shell

# Web servers that usually hold port 80, per distribution family
_WEB_SERVICES: dict[DistroFamily, list[str]] = {
    DistroFamily.DEBIAN: ["apache2", "nginx"],
    DistroFamily.RHEL: ["httpd", "nginx"],
    DistroFamily.FEDORA: ["httpd", "nginx"],
}


def start(service: str) -> None:
    shell.run(["systemctl", "start", service])


def enable(service: str) -> None:
    shell.run(["systemctl", "enable", service])


def stop(service: str) -> bool:
    """Stop *service*; returns False instead of raising if it was not running or absent."""
    result = shell.run(["systemctl", "stop", service], check=False)
    return result.returncode == 0


def conflicting_web_services(family: DistroFamily) -> list[str]:
    return list(_WEB_SERVICES.get(family, []))
