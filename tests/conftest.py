"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import SecretStr

from wpssl_common import SetupParameters, WpsslConfig


@pytest.fixture
def tmp_config(tmp_path: Path) -> WpsslConfig:
    """Return a WpsslConfig pointing at temp directories."""
    (tmp_path / "www").mkdir()
    (tmp_path / "letsencrypt" / "live").mkdir(parents=True)
    (tmp_path / "host" / "etc").mkdir(parents=True)
    return WpsslConfig(
        sites_root=tmp_path / "www",
        letsencrypt_live_dir=tmp_path / "letsencrypt" / "live",
        host_root=tmp_path / "host",
        host_id="test-host",
        log_dir=tmp_path / "log",
        journal_db_path=tmp_path / "lib" / "setup-runs.db",
    )


@pytest.fixture
def params() -> SetupParameters:
    return SetupParameters(
        domain="example.com",
        email="admin@example.com",
        db_user="wpuser",
        db_password=SecretStr("s3cret"),
        db_name="wordpress",
        site_name="mysite",
    )


def write_live_certs(live_dir: Path) -> None:
    """Populate a fake certbot live directory."""
    live_dir.mkdir(parents=True, exist_ok=True)
    (live_dir / "fullchain.pem").write_text("FULLCHAIN\n")
    (live_dir / "privkey.pem").write_text("PRIVKEY\n")
    (live_dir / "chain.pem").write_text("CHAIN\n")
