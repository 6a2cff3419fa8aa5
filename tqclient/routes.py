"""Route table and TUN device management for the full-tunnel mode."""

from __future__ import annotations

import os
import re
import shlex
import socket
import subprocess
import sys
import time
from dataclasses import dataclass

_DOMAIN = re.compile(r"([a-zA-Z0-9-]+.)+([a-zA-Z])+")
_TUN_GATEWAY = "240.0.0.1"
_WINDOWS_TUN_GATEWAY = "10.0.0.1"
_LAN_NETWORKS = (
    ("10.0.0.0", 8, "255.0.0.0"),
    ("172.16.0.0", 12, "255.240.0.0"),
    ("192.168.0.0", 16, "255.255.0.0"),
)


def _family(platform: str) -> str:
    if platform.startswith("win"):
        return "windows"
    if platform == "darwin":
        return "mac"
    if platform.startswith("linux"):
        return "linux"
    return "other"


def is_domain(address: str) -> bool:
    """True if the address looks like a host name rather than an IP address."""
    return _DOMAIN.fullmatch(address) is not None


def _resolve(host: str) -> str | None:
    try:
        return socket.gethostbyname(host)
    except OSError:
        return None


@dataclass(frozen=True)
class TunSettings:
    """Parameters handed to the tun2socks engine."""

    name: str
    address: str
    gateway: str
    dns: str
    proxy_server: str


def tun_settings(platform: str, socks_port: int) -> TunSettings:
    """TUN device settings for the platform, forwarding to the local SOCKS5 port."""
    family = _family(platform)
    name, address, gateway = "tun1", "240.0.0.2", _TUN_GATEWAY
    if family == "windows":
        address, gateway = "10.0.0.2", _WINDOWS_TUN_GATEWAY
    elif family == "mac":
        name = "utun1"
    return TunSettings(
        name=name,
        address=address,
        gateway=gateway,
        dns="8.8.4.4,8.8.8.8",
        proxy_server=f"127.0.0.1:{socks_port}",
    )


def tun_setup_commands(platform: str) -> list[str]:
    """Commands that create and bring up the TUN device before tun2socks starts."""
    if _family(platform) != "linux":
        return []
    return [
        "ip tuntap add mode tun dev tun1",
        "ip addr add 240.0.0.1 dev tun1",
        "ip link set dev tun1 up",
    ]


def set_route_commands(platform: str, server_ip: str, gateway: str) -> list[str]:
    """Commands that send default traffic to the TUN device while bypassing the server and LAN."""
    family = _family(platform)
    if family == "mac":
        return [
            "route delete default",
            f"route add default {_TUN_GATEWAY}",
            f"route add default {gateway} -ifscope en0",
            *(f"route add {net}/{prefix} {gateway}" for net, prefix, _ in _LAN_NETWORKS),
            f"route add {server_ip}/32 {gateway}",
        ]
    if family == "linux":
        return [
            "ip route del default",
            f"ip route add default via {_TUN_GATEWAY}",
            f"ip route add {server_ip}/32 via {gateway}",
        ]
    if family == "windows":
        return [
            f"route add {server_ip} mask 255.255.255.255 {gateway}",
            *(f"route add {net} mask {mask} {gateway}" for net, _, mask in _LAN_NETWORKS),
            f"route add 0.0.0.0 mask 0.0.0.0 {_WINDOWS_TUN_GATEWAY} metric 10",
        ]
    return []


def reset_route_commands(platform: str, server_ip: str, gateway: str) -> list[str]:
    """Commands that restore the original default route and drop the bypass routes."""
    family = _family(platform)
    if family == "mac":
        return [
            "route delete default",
            f"route add default {gateway}",
            *(f"route delete {net}/{prefix}" for net, prefix, _ in _LAN_NETWORKS),
            f"route delete {server_ip}/32",
        ]
    if family == "linux":
        return [
            "ip route delete default",
            f"ip route add default via {gateway}",
            f"ip route delete {server_ip}/32",
        ]
    if family == "windows":
        return [
            f"route delete 0.0.0.0 mask 0.0.0.0 {_WINDOWS_TUN_GATEWAY}",
            *(f"route delete {net} mask {mask} {gateway}" for net, _, mask in _LAN_NETWORKS),
            f"route delete {server_ip} mask 255.255.255.255 {gateway}",
        ]
    return []


def has_root_privileges() -> bool:
    """True if the process runs as root or an elevated administrator."""
    if sys.platform.startswith("win"):
        try:
            completed = subprocess.run(
                ["net", "session"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            return False
        return completed.returncode == 0
    return os.geteuid() == 0


def _capture(args: list[str]) -> str:
    try:
        completed = subprocess.run(args, stdout=subprocess.PIPE, text=True, check=False)
    except OSError:
        return ""
    return completed.stdout or ""


def _windows_gateway(output: str) -> str:
    for line in output.splitlines():
        fields = line.split()
        if len(fields) >= 3 and fields[0] == "0.0.0.0" and fields[1] == "0.0.0.0":
            return fields[2]
    return ""


def default_gateway(platform: str) -> str:
    """The current default gateway, resolved to an address if it is given as a name."""
    family = _family(platform)
    if family == "mac":
        gateway = _capture(
            ["bash", "-c", "route get default | grep gateway | awk '{print $2}'"]
        ).replace("\n", "")
    elif family == "linux":
        gateway = _capture(
            ["bash", "-c", "route -n | awk '{print $2}' | awk 'NR == 3 {print}'"]
        ).replace("\n", "")
    elif family == "windows":
        gateway = _windows_gateway(_capture(["route", "print", "-4", "0.0.0.0"]))
    else:
        gateway = ""
    if is_domain(gateway):
        gateway = _resolve(gateway) or gateway
    return gateway


def _execute(command: str) -> None:
    try:
        subprocess.run(shlex.split(command), check=False)
    except OSError:
        pass


class RouteTable:
    """Installs and removes the routes that push traffic through the TUN device."""

    def __init__(self, server_address: str, platform: str | None = None, gateway: str | None = None):
        self.server_address = server_address
        self.platform = platform or sys.platform
        self.gateway = default_gateway(self.platform) if gateway is None else gateway
        self.server_ip: str | None = None

    def set(self) -> list[str]:
        """Install the routes; return the commands run, none if the server cannot be resolved."""
        if is_domain(self.server_address):
            server_ip = _resolve(self.server_address)
            if server_ip is None:
                return []
        else:
            server_ip = self.server_address
        self.server_ip = server_ip
        commands = set_route_commands(self.platform, server_ip, self.gateway)
        is_mac = _family(self.platform) == "mac"
        for index, command in enumerate(commands):
            _execute(command)
            if is_mac and index == 0:
                time.sleep(0.2)  # give tun2socks time to come up
        return commands

    def reset(self) -> list[str]:
        """Remove the routes installed by set; return the commands run."""
        if self.server_ip is None:
            return []
        commands = reset_route_commands(self.platform, self.server_ip, self.gateway)
        for command in commands:
            _execute(command)
        self.server_ip = None
        return commands