"""Listening-port probes via ss / netstat."""

from __future__ import annotations

import re
import socket
from collections.abc import Iterable

from wpssl.errors import ExternalToolError
from wpssl.services import shell

_ADDR_PORT = re.compile(r"^(?:\[[^\]]*\](?:%[^\s:]+)?|[^\s\[\]]*):(\d+)$")


def _probe(cmd: list[str]) -> str | None:
    try:
        result = shell.run(cmd, check=False)
    except ExternalToolError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def parse_listening_ports(output: str) -> set[int]:
    """Extract local ports from ``ss -tuln`` or ``netstat -tuln`` output."""
    ports: set[int] = set()
    for line in output.splitlines():
        parts = line.split()
        if not parts or not parts[0].startswith(("tcp", "udp")):
            continue
        # The first address:port column is the local address in both formats
        for part in parts[1:]:
            match = _ADDR_PORT.match(part)
            if match:
                ports.add(int(match.group(1)))
                break
    return ports


def listening_ports() -> set[int] | None:
    """Return every locally bound port, or None if neither ss nor netstat is usable."""
    for cmd in (["ss", "-tuln"], ["netstat", "-tuln"]):
        output = _probe(cmd)
        if output is not None:
            return parse_listening_ports(output)
    return None


def _can_bind(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(("0.0.0.0", port))
        except OSError:
            return False
    return True


def ports_in_use(ports: Iterable[int]) -> list[int]:
    bound = listening_ports()
    if bound is None:
        return [port for port in ports if not _can_bind(port)]
    return [port for port in ports if port in bound]


def port_in_use(port: int) -> bool:
    return bool(ports_in_use([port]))
