"""Switch the desktop's system proxy between off, global and PAC modes."""

from __future__ import annotations

import enum
import subprocess
import sys
from dataclasses import dataclass

_LOCALHOST = "127.0.0.1"
_MAC_HELPER = r"/Library/Application\ Support/Trojan-Qt5/proxy_conf_helper"
_KDE_SET = "kwriteconfig5 --file kioslaverc --group 'Proxy Settings' --key"
_KIO_RELOAD = (
    "dbus-send --type=signal /KIO/Scheduler "
    "org.kde.KIO.Scheduler.reparseSlaveConfiguration string:''"
)
_WINDOWS_BYPASS = (
    "localhost;127.*;10.*;172.16.*;172.17.*;172.18.*;172.19.*;172.20.*;172.21.*;"
    "172.22.*;172.23.*;172.24.*;172.25.*;172.26.*;172.27.*;172.28.*;172.29.*;"
    "172.30.*;172.31.*;192.168.*"
)
_WINDOWS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Internet Settings"


class ProxyMode(enum.IntEnum):
    """How the system should route traffic through the local proxy."""

    OFF = 0
    GLOBAL = 1
    PAC = 2


@dataclass(frozen=True)
class LocalPorts:
    """The local listeners that the system proxy points at."""

    socks5_port: int
    http_port: int
    pac_port: int
    enable_http_mode: bool = False


def _pac_url(ports: LocalPorts) -> str:
    return f"http://{_LOCALHOST}:{ports.pac_port}/proxy.pac"


def gnome_commands(mode: ProxyMode | int, ports: LocalPorts) -> list[str]:
    """gsettings commands that apply the mode on GNOME."""
    mode = ProxyMode(mode)
    base = "gsettings set org.gnome.system.proxy"
    if mode is ProxyMode.GLOBAL and ports.enable_http_mode:
        return [
            f"{base} mode manual",
            f"{base}.http host {_LOCALHOST}",
            f"{base}.http port {ports.http_port}",
            f"{base}.https host {_LOCALHOST}",
            f"{base}.https port {ports.http_port}",
            f"{base}.socks host {_LOCALHOST}",
            f"{base}.socks port {ports.socks5_port}",
        ]
    if mode is ProxyMode.GLOBAL:
        return [
            f"{base} mode manual",
            f"{base}.socks host {_LOCALHOST}",
            f"{base}.socks port {ports.socks5_port}",
        ]
    if mode is ProxyMode.PAC:
        return [
            f"{base} mode auto",
            f"{base} autoconfig-url {_pac_url(ports)}",
        ]
    return [
        "gsettings set org.gnome.system.proxy.mode none",
        "gsettings set org.gnome.system.proxy.autoconfig ''",
        "gsettings set org.gnome.system.proxy.http host ''",
        "gsettings set org.gnome.system.proxy.http port 0",
        "gsettings set org.gnome.system.proxy.https host ''",
        "gsettings set org.gnome.system.proxy.https port 0",
        "gsettings set org.gnome.system.proxy.socks host ''",
        "gsettings set org.gnome.system.proxy.socks port 0",
    ]


def kde_commands(mode: ProxyMode | int, ports: LocalPorts) -> list[str]:
    """kwriteconfig5 commands for KDE, ending with the KIO reload signal."""
    mode = ProxyMode(mode)
    if mode is ProxyMode.GLOBAL and ports.enable_http_mode:
        commands = [
            f"{_KDE_SET} ProxyType 1",
            f'{_KDE_SET} httpProxy "{_LOCALHOST}:{ports.http_port}"',
            f'{_KDE_SET} httpsProxy "{_LOCALHOST}:{ports.http_port}"',
            f'{_KDE_SET} socksProxy "{_LOCALHOST}:{ports.socks5_port}"',
        ]
    elif mode is ProxyMode.GLOBAL:
        commands = [
            f"{_KDE_SET} ProxyType 1",
            f'{_KDE_SET} socksProxy "{_LOCALHOST}:{ports.socks5_port}"',
        ]
    elif mode is ProxyMode.PAC:
        commands = [
            f"{_KDE_SET} ProxyType 2",
            f"{_KDE_SET} 'Proxy Config Script' \"{_pac_url(ports)}\"",
        ]
    else:
        commands = [
            f"{_KDE_SET} ProxyType 0",
            f"{_KDE_SET} 'Proxy Config Script' \"\"",
            f'{_KDE_SET} httpProxy ""',
            f'{_KDE_SET} httpsProxy ""',
            f'{_KDE_SET} socksProxy ""',
        ]
    commands.append(_KIO_RELOAD)
    return commands


def mac_commands(mode: ProxyMode | int, ports: LocalPorts) -> list[str]:
    """The proxy helper invocation that applies the mode on macOS."""
    mode = ProxyMode(mode)
    if mode is ProxyMode.GLOBAL and ports.enable_http_mode:
        return [
            f"{_MAC_HELPER} -m global -l {_LOCALHOST} -p {ports.socks5_port} "
            f"-s {_LOCALHOST} -r {ports.http_port}"
        ]
    if mode is ProxyMode.GLOBAL:
        return [f"{_MAC_HELPER} -m global -l {_LOCALHOST} -p {ports.socks5_port}"]
    if mode is ProxyMode.PAC:
        return [f"{_MAC_HELPER} -m auto -u {_pac_url(ports)}"]
    return [f"{_MAC_HELPER} -m off"]


def run_shell(command: str) -> str:
    """Run a shell command and return what it wrote to standard output."""
    try:
        completed = subprocess.run(
            command, shell=True, stdout=subprocess.PIPE, text=True, check=False
        )
    except OSError as exc:
        raise RuntimeError(f"could not run shell command: {exc}") from exc
    return completed.stdout or ""


def _succeeds(command: str) -> bool:
    try:
        completed = subprocess.run(command, shell=True, check=False)
    except OSError:
        return False
    return completed.returncode == 0


def _set_windows_proxy(mode: ProxyMode, ports: LocalPorts) -> None:
    import winreg

    with winreg.OpenKey(winreg.HKEY_CURRENT_USER, _WINDOWS_KEY, 0, winreg.KEY_WRITE) as key:
        if mode is ProxyMode.GLOBAL and ports.enable_http_mode:
            winreg.SetValueEx(key, "ProxyEnable", 0, winreg.REG_DWORD, 1)
            winreg.SetValueEx(
                key, "ProxyServer", 0, winreg.REG_SZ, f"{_LOCALHOST}:{ports.http_port}"
            )
            winreg.SetValueEx(key, "ProxyOverride", 0, winreg.REG_SZ, _WINDOWS_BYPASS)
        elif mode is ProxyMode.PAC:
            winreg.SetValueEx(key, "ProxyEnable", 0, winreg.REG_DWORD, 0)
            winreg.SetValueEx(key, "AutoConfigURL", 0, winreg.REG_SZ, _pac_url(ports))
        elif mode is ProxyMode.OFF:
            winreg.SetValueEx(key, "ProxyEnable", 0, winreg.REG_DWORD, 0)
            try:
                winreg.DeleteValue(key, "AutoConfigURL")
            except FileNotFoundError:
                pass


def set_system_proxy(mode: ProxyMode | int, ports: LocalPorts) -> list[str]:
    """Apply the mode on this desktop; return the shell commands that were run."""
    mode = ProxyMode(mode)
    platform = sys.platform
    if platform.startswith("win"):
        _set_windows_proxy(mode, ports)
        return []
    if platform == "darwin":
        commands = mac_commands(mode, ports)
    elif platform.startswith("linux"):
        if _succeeds("gsettings --version > /dev/null"):
            commands = gnome_commands(mode, ports)
        elif _succeeds("kwriteconfig5 --help > /dev/null"):
            commands = kde_commands(mode, ports)
        else:
            return []
    else:
        return []
    for command in commands:
        run_shell(command)
    return commands