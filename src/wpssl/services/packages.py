"""Distribution-aware installation of Docker, Compose and Certbot.

Each supported family maps to an ordered list of commands. Unknown
distributions raise ``UnsupportedPlatformError`` from the command tables;
``install_docker`` downgrades that to a warning, ``install_certbot`` lets it
abort the run.
"""

from __future__ import annotations

from rich.console import Console

from wpssl_common import DistributionInfo, DistroFamily

from wpssl.errors import UnsupportedPlatformError
from wpssl.services import docker, shell

console = Console()

DOCKER_DOCS_URL = "https://docs.docker.com/engine/install/"
CERTBOT_DOCS_URL = "https://certbot.eff.org/instructions"

_DOCKER_PACKAGES = ["docker-ce", "docker-ce-cli", "containerd.io", "docker-compose-plugin"]
_DOCKER_KEYRING = "/usr/share/keyrings/docker-archive-keyring.gpg"


def _debian_docker(dist: DistributionInfo) -> list[list[str]]:
    # Derivatives (mint, pop) use the Ubuntu repository with their base codename
    repo = "debian" if dist.id == "debian" else "ubuntu"
    base_url = f"https://download.docker.com/linux/{repo}"
    return [
        ["apt-get", "update"],
        ["apt-get", "install", "-y", "apt-transport-https", "ca-certificates", "curl", "gnupg", "lsb-release"],
        ["sh", "-c", f"curl -fsSL {base_url}/gpg | gpg --dearmor --yes -o {_DOCKER_KEYRING}"],
        [
            "sh", "-c",
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={_DOCKER_KEYRING}] {base_url} '
            '$(. /etc/os-release && echo "${UBUNTU_CODENAME:-$VERSION_CODENAME}") stable" '
            "> /etc/apt/sources.list.d/docker.list",
        ],
        ["apt-get", "update"],
        ["apt-get", "install", "-y", *_DOCKER_PACKAGES],
    ]


def _rhel_docker(dist: DistributionInfo) -> list[list[str]]:
    return [
        ["yum", "install", "-y", "yum-utils"],
        ["yum-config-manager", "--add-repo", "https://download.docker.com/linux/centos/docker-ce.repo"],
        ["yum", "install", "-y", *_DOCKER_PACKAGES],
    ]


def _fedora_docker(dist: DistributionInfo) -> list[list[str]]:
    return [
        ["dnf", "-y", "install", "dnf-plugins-core"],
        ["dnf", "config-manager", "--add-repo", "https://download.docker.com/linux/fedora/docker-ce.repo"],
        ["dnf", "-y", "install", *_DOCKER_PACKAGES],
    ]


def _suse_docker(dist: DistributionInfo) -> list[list[str]]:
    return [
        ["zypper", "refresh"],
        ["zypper", "install", "-y", "docker", "docker-compose"],
    ]


def _arch_docker(dist: DistributionInfo) -> list[list[str]]:
    return [["pacman", "-Sy", "docker", "docker-compose", "--noconfirm"]]


_DOCKER_TABLE = {
    DistroFamily.DEBIAN: _debian_docker,
    DistroFamily.RHEL: _rhel_docker,
    DistroFamily.FEDORA: _fedora_docker,
    DistroFamily.SUSE: _suse_docker,
    DistroFamily.ARCH: _arch_docker,
}

_CERTBOT_TABLE: dict[DistroFamily, list[list[str]]] = {
    DistroFamily.DEBIAN: [
        ["apt-get", "update"],
        ["apt-get", "install", "-y", "certbot"],
    ],
    DistroFamily.RHEL: [
        ["yum", "install", "-y", "epel-release"],
        ["yum", "install", "-y", "certbot"],
    ],
    DistroFamily.FEDORA: [["dnf", "install", "-y", "certbot"]],
    DistroFamily.SUSE: [["zypper", "install", "-y", "certbot"]],
    DistroFamily.ARCH: [["pacman", "-Sy", "certbot", "--noconfirm"]],
}


def docker_install_commands(dist: DistributionInfo) -> list[list[str]]:
    builder = _DOCKER_TABLE.get(dist.family)
    if builder is None:
        raise UnsupportedPlatformError(
            f"Unsupported distribution for automatic Docker installation: {dist.id}"
        )
    return builder(dist)


def certbot_install_commands(dist: DistributionInfo) -> list[list[str]]:
    commands = _CERTBOT_TABLE.get(dist.family)
    if commands is None:
        raise UnsupportedPlatformError(
            f"Unsupported distribution for automatic Certbot installation: {dist.id}. "
            f"Install Certbot manually: {CERTBOT_DOCS_URL}"
        )
    return [list(cmd) for cmd in commands]


def _run_all(commands: list[list[str]]) -> None:
    for cmd in commands:
        shell.run(cmd, capture=False)


def install_docker(dist: DistributionInfo, user: str) -> None:
    """Install Docker Engine and Compose, then start the daemon and grant *user* access."""
    if shell.command_exists("docker") and docker.compose_available():
        console.print("[green]Docker and Docker Compose are already installed.[/green]")
        return

    console.print("[yellow]Installing Docker and Docker Compose...[/yellow]")
    try:
        commands = docker_install_commands(dist)
    except UnsupportedPlatformError as exc:
        console.print(f"[red]{exc}[/red]")
        console.print("[yellow]Please install Docker and Docker Compose manually:[/yellow]")
        console.print(f"[blue]{DOCKER_DOCS_URL}[/blue]")
        console.print("[yellow]Continuing with the setup assuming Docker is installed...[/yellow]")
    else:
        _run_all(commands)

    docker.ensure_service()

    if docker.ensure_group_member(user):
        console.print(
            f"[yellow]Added user {user} to the docker group. "
            "Log out and back in for this change to take effect.[/yellow]"
        )

    tag = docker.ensure_compose()
    if tag:
        console.print(f"[green]Installed Docker Compose {tag}.[/green]")

    console.print("[green]Docker and Docker Compose installation completed.[/green]")


def install_certbot(dist: DistributionInfo) -> None:
    """Install Certbot. Unsupported distributions are fatal."""
    if shell.command_exists("certbot"):
        console.print("[green]Certbot is already installed.[/green]")
        return

    console.print("[yellow]Installing Certbot...[/yellow]")
    _run_all(certbot_install_commands(dist))
    console.print("[green]Certbot installation completed.[/green]")
