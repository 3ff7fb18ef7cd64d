"""Linux distribution detection from release metadata files."""

from __future__ import annotations

import shlex
from pathlib import Path

from wpssl_common import DistributionInfo


def parse_release_file(path: Path) -> dict[str, str]:
    """Parse a ``KEY=value`` release file, honouring shell quoting."""
    values: dict[str, str] = {}
    for line in path.read_text(errors="replace").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, raw = line.split("=", 1)
        try:
            words = shlex.split(raw)
        except ValueError:
            words = [raw.strip("\"'")]
        values[key.strip()] = " ".join(words)
    return values


def detect(host_root: Path = Path("/")) -> DistributionInfo:
    """Return the distribution described by the first release source present.

    Sources are tried in order and never merged: ``/etc/os-release``,
    ``/etc/lsb-release``, then the Debian, Red Hat and Fedora marker files.
    """
    etc = host_root / "etc"

    os_release = etc / "os-release"
    if os_release.is_file():
        data = parse_release_file(os_release)
        return DistributionInfo(id=data.get("ID", ""), version=data.get("VERSION_ID", ""))

    lsb_release = etc / "lsb-release"
    if lsb_release.is_file():
        data = parse_release_file(lsb_release)
        return DistributionInfo(
            id=data.get("DISTRIB_ID", ""),
            version=data.get("DISTRIB_RELEASE", ""),
        )

    for marker, distro_id in (
        ("debian_version", "debian"),
        ("redhat-release", "rhel"),
        ("fedora-release", "fedora"),
    ):
        if (etc / marker).is_file():
            return DistributionInfo(id=distro_id)

    return DistributionInfo(id="unknown")
