"""Host distribution identity and family grouping."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, field_validator


class DistroFamily(str, Enum):
    DEBIAN = "debian"
    RHEL = "rhel"
    FEDORA = "fedora"
    SUSE = "suse"
    ARCH = "arch"
    UNKNOWN = "unknown"


_FAMILY_IDS: dict[DistroFamily, frozenset[str]] = {
    DistroFamily.DEBIAN: frozenset({"ubuntu", "debian", "linuxmint", "mint", "pop"}),
    DistroFamily.RHEL: frozenset({"centos", "rhel", "rocky", "almalinux", "alma"}),
    DistroFamily.FEDORA: frozenset({"fedora"}),
    DistroFamily.SUSE: frozenset({"suse", "sles"}),
    DistroFamily.ARCH: frozenset({"arch", "manjaro"}),
}


def family_of(distro_id: str) -> DistroFamily:
    """Map a lowercase distribution id to its family (``UNKNOWN`` if unmapped)."""
    for family, ids in _FAMILY_IDS.items():
        if distro_id in ids:
            return family
    if distro_id.startswith("opensuse"):
        return DistroFamily.SUSE
    return DistroFamily.UNKNOWN


class DistributionInfo(BaseModel):
    """Normalized distribution id and version as read from the host."""

    id: str = "unknown"
    version: str = ""

    @field_validator("id")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower() or "unknown"

    @property
    def family(self) -> DistroFamily:
        return family_of(self.id)

    def __str__(self) -> str:
        return f"{self.id} {self.version}".strip()
