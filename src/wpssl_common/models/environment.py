"""Generated site directory and the certificate files placed in it."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from wpssl_common.constants import (
    APACHE_CONF_DIR,
    BACKUPS_DIR,
    COMPOSE_FILE,
    HELPER_SCRIPTS,
    RENEWAL_SCRIPT,
    SSL_DIR,
)


class CertificateBundle(BaseModel):
    """Certificate material copied into ``<base_dir>/ssl``."""

    certificate: Path
    private_key: Path
    ca_bundle: Path

    @classmethod
    def in_dir(cls, ssl_dir: Path) -> CertificateBundle:
        return cls(
            certificate=ssl_dir / "certificate.crt",
            private_key=ssl_dir / "private.key",
            ca_bundle=ssl_dir / "ca_bundle.crt",
        )


class TargetEnvironment(BaseModel):
    """A materialized WordPress site directory."""

    base_dir: Path

    @property
    def ssl_dir(self) -> Path:
        return self.base_dir / SSL_DIR

    @property
    def apache_conf_dir(self) -> Path:
        return self.base_dir / APACHE_CONF_DIR

    @property
    def backups_dir(self) -> Path:
        return self.base_dir / BACKUPS_DIR

    @property
    def ssl_vhost(self) -> Path:
        return self.apache_conf_dir / "default-ssl.conf"

    @property
    def http_vhost(self) -> Path:
        return self.apache_conf_dir / "000-default.conf"

    @property
    def dockerfile(self) -> Path:
        return self.base_dir / "Dockerfile"

    @property
    def compose_file(self) -> Path:
        return self.base_dir / COMPOSE_FILE

    @property
    def helper_scripts(self) -> list[Path]:
        return [self.base_dir / name for name in HELPER_SCRIPTS]

    @property
    def renewal_script(self) -> Path:
        return self.base_dir / RENEWAL_SCRIPT

    @property
    def certificates(self) -> CertificateBundle:
        return CertificateBundle.in_dir(self.ssl_dir)
