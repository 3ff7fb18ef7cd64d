"""Certificate provisioning: free port 80, run certbot, copy the bundle."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from wpssl_common import CertificateBundle, DistributionInfo, SetupParameters, TargetEnvironment
from wpssl_common.constants import HTTP_PORT
from wpssl_common.config import get_config

from wpssl.errors import PostconditionError, ResourceConflictError
from wpssl.services import certbot, docker, ports, systemd

console = Console()


def _stop_existing_stack(target: TargetEnvironment) -> None:
    if target.compose_file.exists() and docker.compose_available():
        docker.compose_down(target.compose_file, check=False)


def free_http_port(
    dist: DistributionInfo,
    *,
    confirm: Callable[[str], bool],
    pause: Callable[[str], object],
) -> None:
    """Make sure port 80 is free for the standalone challenge, asking first."""
    if not ports.port_in_use(HTTP_PORT):
        return

    console.print(
        f"[red]Warning: Port {HTTP_PORT} is already in use. "
        f"Certbot needs port {HTTP_PORT} to be free.[/red]"
    )
    if not confirm(f"Would you like to stop services using port {HTTP_PORT} and continue?"):
        raise ResourceConflictError(
            f"SSL certificate acquisition aborted. Please free port {HTTP_PORT} and run again."
        )

    services = systemd.conflicting_web_services(dist.family)
    if services:
        for service in services:
            if systemd.stop(service):
                console.print(f"  Stopped {service}")
    else:
        console.print(f"[yellow]Please stop the services using port {HTTP_PORT} manually.[/yellow]")
        pause(f"Press Enter to continue when port {HTTP_PORT} is free")


def provision_certificate(
    params: SetupParameters,
    target: TargetEnvironment,
    dist: DistributionInfo,
    *,
    confirm: Callable[[str], bool],
    pause: Callable[[str], object],
) -> CertificateBundle:
    """Obtain a certificate for the domain and its www alias into ``target.ssl_dir``."""
    cfg = get_config()

    _stop_existing_stack(target)
    free_http_port(dist, confirm=confirm, pause=pause)

    certbot.issue_standalone(params.domain, params.email)

    live = cfg.cert_live_dir(params.domain)
    if not live.is_dir():
        raise PostconditionError(
            f"Certbot reported success but {live} does not exist. "
            "Please check the error messages above."
        )

    return certbot.copy_bundle(live, target.ssl_dir)
