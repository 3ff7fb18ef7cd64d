"""Interactive WordPress + SSL setup."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from wpssl_common import DistributionInfo, SetupParameters, TargetEnvironment
from wpssl_common.constants import REQUIRED_PORTS
from wpssl_common.config import get_config
from wpssl_common.validation import validate_domain, validate_email, validate_site_name

from wpssl.errors import InputValidationError, PrivilegeError, ResourceConflictError, WpsslError
from wpssl.journal import SetupJournal, record_setup
from wpssl.services import (
    certificates,
    distro,
    docker,
    materializer,
    packages,
    ports,
    renewal,
    shell,
)

console = Console()

_PORT_ROLES = {80: "HTTP", 443: "HTTPS", 8080: "phpMyAdmin (optional)"}
PIPELINE_STEPS = 8


def _confirm(message: str) -> bool:
    return typer.confirm(message, default=False)


def _pause(message: str) -> None:
    typer.prompt(message, default="", show_default=False)


def require_root() -> None:
    if os.geteuid() != 0:
        raise PrivilegeError(
            "This command requires root privileges. Please run it with sudo or as root."
        )


def _prompt_until(label: str, check: Callable[[str], bool], error: str) -> str:
    while True:
        value = typer.prompt(label).strip()
        if check(value):
            return value
        console.print(f"[red]Error: {error}[/red]")


def prompt_parameters() -> SetupParameters:
    """Ask for every setup value, re-prompting until domain, email and site name are valid."""
    domain = _prompt_until(
        "Enter your domain name (e.g., yourdomain.com)",
        validate_domain,
        "Invalid domain name format.",
    )
    email = _prompt_until("Enter your email address", validate_email, "Invalid email address format.")
    db_user = _prompt_until("Enter WordPress database username", bool, "The username must not be empty.")
    db_password = typer.prompt("Enter WordPress database password", hide_input=True)
    db_name = _prompt_until("Enter WordPress database name", bool, "The database name must not be empty.")
    site_name = _prompt_until(
        "Enter a name for your website directory (e.g., mywebsite)",
        validate_site_name,
        "The directory name must not contain '/'.",
    )
    try:
        return SetupParameters(
            domain=domain,
            email=email,
            db_user=db_user,
            db_password=db_password,
            db_name=db_name,
            site_name=site_name,
        )
    except ValidationError as exc:
        raise InputValidationError(str(exc)) from exc


def confirm_overwrite(base_dir: Path, confirm: Callable[[str], bool]) -> None:
    if not base_dir.exists():
        return
    console.print(f"[yellow]Warning: Directory {base_dir} already exists.[/yellow]")
    if not confirm("Do you want to overwrite the existing directory?"):
        raise ResourceConflictError("Setup aborted. Please choose a different directory name.")


def check_ports(confirm: Callable[[str], bool]) -> None:
    """Warn about bound ports the stack needs; the operator may continue anyway."""
    used = ports.ports_in_use(REQUIRED_PORTS)
    if not used:
        console.print("[green]All required ports are available.[/green]")
        return

    console.print(
        "[red]Warning: The following ports are already in use: "
        f"{' '.join(str(p) for p in used)}[/red]"
    )
    console.print("[yellow]These ports are needed for the WordPress setup:[/yellow]")
    for port in REQUIRED_PORTS:
        console.print(f"[yellow]  - Port {port}: {_PORT_ROLES[port]}[/yellow]")
    if not confirm("Would you like to continue anyway?"):
        raise ResourceConflictError("Setup aborted. Please free the required ports and try again.")


def set_ownership(base_dir: Path) -> None:
    user = os.environ.get("SUDO_USER")
    if not user:
        console.print("  Not started through sudo; leaving ownership with root.")
        return
    shell.run(["chown", "-R", f"{user}:{user}", str(base_dir)])
    console.print(f"  {base_dir} is now owned by {user}")


def print_summary(params: SetupParameters, target: TargetEnvironment) -> None:
    console.print("\n[green bold]WordPress with SSL setup completed![/green bold]\n")
    console.print("[blue]Website Details:[/blue]")
    console.print(f"  - Website URL: [green]https://{params.domain}[/green]")
    console.print(f"  - Website Directory: [green]{target.base_dir}[/green]")
    console.print(f"  - phpMyAdmin URL: [green]http://{params.domain}:8080[/green]")
    console.print("\n[blue]Helper Scripts:[/blue]")
    for label, script in zip(
        ("Start containers", "Stop containers", "Restart containers", "Backup website"),
        target.helper_scripts,
    ):
        console.print(f"  - {label}: [green]{script}[/green]")
    console.print(
        "\n[yellow]Note: Point your domain's DNS records at this server's IP address.[/yellow]"
    )
    console.print("[yellow]Note: SSL certificates will be renewed automatically every week.[/yellow]")


def run_pipeline(
    params: SetupParameters,
    dist: DistributionInfo,
    base_dir: Path,
    journal: SetupJournal,
    *,
    confirm: Callable[[str], bool] = _confirm,
    pause: Callable[[str], object] = _pause,
) -> TargetEnvironment:
    """Every side-effecting step after the operator has answered the prompts."""
    base_dir.mkdir(parents=True, exist_ok=True)

    with journal.step("Checking if required ports are available"):
        check_ports(confirm)

    with journal.step("Installing Docker and Docker Compose"):
        packages.install_docker(dist, shell.invoking_user())

    with journal.step("Installing Certbot"):
        packages.install_certbot(dist)

    with journal.step(f"Generating WordPress Docker environment in {base_dir}"):
        target = materializer.materialize(params, base_dir)

    with journal.step(f"Obtaining SSL certificates for {params.domain}"):
        certificates.provision_certificate(params, target, dist, confirm=confirm, pause=pause)

    with journal.step("Setting ownership of the website directory"):
        set_ownership(base_dir)

    with journal.step("Starting Docker containers"):
        docker.compose_up(target.compose_file)

    with journal.step("Setting up automatic SSL renewal"):
        line = renewal.schedule_renewal(params, target)
        console.print(f"  Cron entry added: {line}")

    return target


def setup() -> None:
    """Provision WordPress in Docker with a Let's Encrypt certificate (interactive)."""
    cfg = get_config()
    console.print("[bold blue]WordPress Docker SSL Setup[/bold blue]")

    try:
        require_root()
        dist = distro.detect(cfg.host_root)
        console.print(f"[blue]Detected Linux distribution: {dist}[/blue]")

        params = prompt_parameters()
        base_dir = cfg.site_dir(params.site_name)
        confirm_overwrite(base_dir, _confirm)

        with record_setup(params, dist, base_dir, PIPELINE_STEPS) as journal:
            target = run_pipeline(params, dist, base_dir, journal)
    except WpsslError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(exc.exit_code)

    print_summary(params, target)
