"""Central configuration for wpssl."""

from __future__ import annotations

import os
import socket
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from wpssl_common.constants import (
    JOURNAL_DB_PATH,
    JOURNAL_FILE,
    LETSENCRYPT_LIVE_DIR,
    LOG_DIR,
    RENEWAL_SCHEDULE,
    SITES_ROOT,
)


def _env_path(name: str, default: Path) -> Path:
    env = os.environ.get(name)
    return Path(env) if env else default


class WpsslConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    sites_root: Path = Field(default_factory=lambda: _env_path("WPSSL_SITES_ROOT", SITES_ROOT))
    letsencrypt_live_dir: Path = Field(
        default_factory=lambda: _env_path("WPSSL_LETSENCRYPT_LIVE", LETSENCRYPT_LIVE_DIR)
    )
    host_root: Path = Field(default_factory=lambda: _env_path("WPSSL_HOST_ROOT", Path("/")))
    host_id: str = Field(default_factory=lambda: os.environ.get("WPSSL_HOST_ID") or socket.gethostname())
    renewal_schedule: str = Field(default=RENEWAL_SCHEDULE)
    log_dir: Path = Field(default_factory=lambda: _env_path("WPSSL_LOG_DIR", LOG_DIR))
    journal_db_path: Path = Field(default=JOURNAL_DB_PATH)

    def site_dir(self, site_name: str) -> Path:
        return self.sites_root / site_name

    def cert_live_dir(self, domain: str) -> Path:
        return self.letsencrypt_live_dir / domain

    @property
    def journal_path(self) -> Path:
        return self.log_dir / JOURNAL_FILE


@lru_cache(maxsize=1)
def get_config() -> WpsslConfig:
    """Environment overrides are read on the first call only."""
    return WpsslConfig()
