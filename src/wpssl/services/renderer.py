"""Jinja2-based renderer for the generated site artifacts.

Templates only substitute values; quoting filters keep operator input
intact inside YAML and shell contexts.
"""

from __future__ import annotations

import json
import shlex
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wpssl_common import SetupParameters, TargetEnvironment
from wpssl_common.constants import APACHE_CONF_DIR

from wpssl.services import certbot

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _compose_str(value: object) -> str:
    # Compose interpolates $VAR, so a literal dollar is written as $$
    return json.dumps(str(value).replace("$", "$$"))


def _sh_quote(value: object) -> str:
    return shlex.quote(str(value))


def _get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["compose_str"] = _compose_str
    env.filters["sh_quote"] = _sh_quote
    return env


def _render(name: str, **context: object) -> str:
    return _get_env().get_template(name).render(**context)


def render_ssl_vhost(params: SetupParameters) -> str:
    """Render the Apache HTTPS vhost (port 443)."""
    return _render("default-ssl.conf.j2", domain=params.domain)


def render_http_vhost(params: SetupParameters) -> str:
    """Render the Apache port-80 vhost that redirects to HTTPS."""
    return _render("000-default.conf.j2", domain=params.domain)


def render_dockerfile(target: TargetEnvironment) -> str:
    return _render(
        "Dockerfile.j2",
        apache_conf_dir=APACHE_CONF_DIR,
        ssl_vhost=target.ssl_vhost.name,
        http_vhost=target.http_vhost.name,
    )


def render_compose(params: SetupParameters) -> str:
    return _render(
        "docker-compose.yml.j2",
        db_user=params.db_user,
        db_password=params.db_password.get_secret_value(),
        db_name=params.db_name,
    )


def render_script(name: str, params: SetupParameters, target: TargetEnvironment) -> str:
    """Render one of the lifecycle scripts (start.sh, stop.sh, restart.sh, backup.sh)."""
    return _render(
        f"{name}.j2",
        compose_file=target.compose_file,
        backups_dir=target.backups_dir,
        db_user=params.db_user,
        db_password=params.db_password.get_secret_value(),
        db_name=params.db_name,
    )


def render_renewal_script(target: TargetEnvironment, live_dir: Path) -> str:
    return _render(
        "renew-ssl.sh.j2",
        compose_file=target.compose_file,
        live_dir=live_dir,
        ssl_dir=target.ssl_dir,
        renew_command=" ".join(certbot.RENEW_COMMAND),
    )
