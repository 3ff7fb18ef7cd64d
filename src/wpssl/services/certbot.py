"""Certbot certificate issuance and bundle handling."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from wpssl_common import CertificateBundle
from wpssl_common.constants import CERT_FILES

from wpssl.errors import ExternalToolError
from wpssl.services import shell

RENEW_COMMAND = ["certbot", "renew", "--quiet"]

# Owner read/write only for the key, world-readable for the rest
_MODES = {
    "certificate.crt": 0o644,
    "private.key": 0o600,
    "ca_bundle.crt": 0o644,
}


def issue_standalone(domain: str, email: str, *, include_www: bool = True) -> None:
    """Issue a Let's Encrypt certificate via the HTTP-01 standalone challenge."""
    cmd = [
        "certbot", "certonly", "--standalone",
        "--preferred-challenges", "http",
        "--email", email,
        "--agree-tos", "--no-eff-email", "--non-interactive",
        "-d", domain,
    ]
    if include_www:
        cmd.extend(["-d", f"www.{domain}"])

    result = shell.run(cmd, check=False)
    if result.returncode != 0:
        raise ExternalToolError(f"Certbot failed for {domain}:\n{result.stderr}")


def _copy_with_mode(src: Path, dst: Path, mode: int) -> None:
    """Copy *src* into *dst*, which has *mode* before any content is written."""
    # live/ entries are symlinks into archive/; open() follows them
    with open(src, "rb") as inp:
        fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        # O_CREAT only applies mode (minus umask) to new files
        os.fchmod(fd, mode)
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(inp, out)


def copy_bundle(source: Path, ssl_dir: Path) -> CertificateBundle:
    """Copy the live PEM files into *ssl_dir* under their canonical names."""
    ssl_dir.mkdir(parents=True, exist_ok=True)
    for src_name, dst_name in CERT_FILES.items():
        _copy_with_mode(source / src_name, ssl_dir / dst_name, _MODES[dst_name])
    return CertificateBundle.in_dir(ssl_dir)
