"""Format checks for operator-supplied domain names and email addresses."""

from __future__ import annotations

import re

_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
_DOMAIN_RE = re.compile(rf"{_LABEL}(?:\.{_LABEL})*")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def validate_domain(value: str) -> bool:
    """Return True if *value* is one or more dot-separated hostname labels."""
    return _DOMAIN_RE.fullmatch(value) is not None


def validate_email(value: str) -> bool:
    """Return True if *value* looks like ``local@host.tld``."""
    return _EMAIL_RE.fullmatch(value) is not None


def validate_site_name(value: str) -> bool:
    """Return True if *value* is usable as a single directory name."""
    return bool(value) and "/" not in value and value not in (".", "..") and "\0" not in value
