"""Write the WordPress site directory from setup parameters."""

from __future__ import annotations

from pathlib import Path

from wpssl_common import SetupParameters, TargetEnvironment
from wpssl_common.constants import HELPER_SCRIPTS

from wpssl.services import renderer

SCRIPT_MODE = 0o755


def write_file(path: Path, content: str, *, mode: int | None = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mode is not None:
        path.chmod(mode)


def materialize(params: SetupParameters, base_dir: Path) -> TargetEnvironment:
    """Render every site artifact into *base_dir*, overwriting existing files.

    The caller must already have confirmed that overwriting *base_dir* is
    acceptable. Nothing is cleaned up if a write fails part way.
    """
    target = TargetEnvironment(base_dir=base_dir)
    for d in (target.base_dir, target.ssl_dir, target.apache_conf_dir):
        d.mkdir(parents=True, exist_ok=True)

    write_file(target.ssl_vhost, renderer.render_ssl_vhost(params))
    write_file(target.http_vhost, renderer.render_http_vhost(params))
    write_file(target.dockerfile, renderer.render_dockerfile(target))
    write_file(target.compose_file, renderer.render_compose(params))

    for name in HELPER_SCRIPTS:
        write_file(
            target.base_dir / name,
            renderer.render_script(name, params, target),
            mode=SCRIPT_MODE,
        )

    return target
