import subprocess
import sys
from unittest import mock

import pytest

from tqclient.sysproxy import (
    LocalPorts,
    ProxyMode,
    gnome_commands,
    kde_commands,
    mac_commands,
    run_shell,
    set_system_proxy,
)

PORTS = LocalPorts(socks5_port=1080, http_port=1081, pac_port=8070)
HTTP_PORTS = LocalPorts(socks5_port=1080, http_port=1081, pac_port=8070, enable_http_mode=True)


def _completed(code=0):
    return subprocess.CompletedProcess(args="", returncode=code, stdout="")


def test_mode_values_follow_method_numbers():
    assert [ProxyMode(0), ProxyMode(1), ProxyMode(2)] == [
        ProxyMode.OFF,
        ProxyMode.GLOBAL,
        ProxyMode.PAC,
    ]


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        gnome_commands(5, PORTS)


def test_gnome_global_socks_only():
    commands = gnome_commands(ProxyMode.GLOBAL, PORTS)
    assert commands[0] == "gsettings set org.gnome.system.proxy mode manual"
    assert commands[-1].endswith(f"socks port {PORTS.socks5_port}")
    assert len(commands) == 3
    assert not any(".http" in command for command in commands)


def test_gnome_global_http_sets_all_proxies():
    commands = gnome_commands(1, HTTP_PORTS)
    assert f"gsettings set org.gnome.system.proxy.http port {HTTP_PORTS.http_port}" in commands
    assert f"gsettings set org.gnome.system.proxy.https port {HTTP_PORTS.http_port}" in commands
    assert f"gsettings set org.gnome.system.proxy.socks port {HTTP_PORTS.socks5_port}" in commands


def test_gnome_pac():
    commands = gnome_commands(ProxyMode.PAC, PORTS)
    assert commands == [
        "gsettings set org.gnome.system.proxy mode auto",
        f"gsettings set org.gnome.system.proxy autoconfig-url http://127.0.0.1:{PORTS.pac_port}/proxy.pac",
    ]


def test_gnome_off_clears_everything():
    commands = gnome_commands(ProxyMode.OFF, PORTS)
    assert commands[0] == "gsettings set org.gnome.system.proxy.mode none"
    assert "gsettings set org.gnome.system.proxy.socks port 0" in commands
    assert len(commands) == 8


def test_kde_always_ends_with_reload():
    reload = "dbus-send --type=signal /KIO/Scheduler org.kde.KIO.Scheduler.reparseSlaveConfiguration string:''"
    for mode in ProxyMode:
        assert kde_commands(mode, PORTS)[-1] == reload


def test_kde_global_http():
    commands = kde_commands(ProxyMode.GLOBAL, HTTP_PORTS)
    assert commands[0] == "kwriteconfig5 --file kioslaverc --group 'Proxy Settings' --key ProxyType 1"
    assert (
        f"kwriteconfig5 --file kioslaverc --group 'Proxy Settings' --key httpsProxy \"127.0.0.1:{HTTP_PORTS.http_port}\""
        in commands
    )


def test_kde_pac_uses_type_two():
    commands = kde_commands(ProxyMode.PAC, PORTS)
    assert commands[0].endswith("ProxyType 2")
    assert f"http://127.0.0.1:{PORTS.pac_port}/proxy.pac" in commands[1]


def test_mac_commands():
    assert mac_commands(ProxyMode.OFF, PORTS) == [
        r"/Library/Application\ Support/Trojan-Qt5/proxy_conf_helper -m off"
    ]
    (global_http,) = mac_commands(ProxyMode.GLOBAL, HTTP_PORTS)
    assert global_http.endswith(f"-p {HTTP_PORTS.socks5_port} -s 127.0.0.1 -r {HTTP_PORTS.http_port}")
    (pac,) = mac_commands(ProxyMode.PAC, PORTS)
    assert "-m auto -u" in pac


def test_run_shell_returns_output():
    command = f'"{sys.executable}" -c "print(42)"'
    assert run_shell(command).strip() == "42"


def test_set_system_proxy_on_mac():
    with mock.patch.object(sys, "platform", "darwin"), mock.patch(
        "tqclient.sysproxy.subprocess.run", return_value=_completed()
    ) as run:
        commands = set_system_proxy(ProxyMode.PAC, PORTS)
    assert commands == mac_commands(ProxyMode.PAC, PORTS)
    assert run.call_args_list[0].args[0] == commands[0]


def test_set_system_proxy_on_gnome():
    with mock.patch.object(sys, "platform", "linux"), mock.patch(
        "tqclient.sysproxy.subprocess.run", return_value=_completed()
    ) as run:
        commands = set_system_proxy(ProxyMode.GLOBAL, PORTS)
    assert commands == gnome_commands(ProxyMode.GLOBAL, PORTS)
    issued = [call.args[0] for call in run.call_args_list]
    assert issued[0] == "gsettings --version > /dev/null"
    assert issued[1:] == commands


def test_set_system_proxy_falls_back_to_kde():
    results = [_completed(1)] + [_completed(0)] * 20
    with mock.patch.object(sys, "platform", "linux"), mock.patch(
        "tqclient.sysproxy.subprocess.run", side_effect=results
    ):
        commands = set_system_proxy(ProxyMode.OFF, PORTS)
    assert commands == kde_commands(ProxyMode.OFF, PORTS)


def test_set_system_proxy_without_desktop_tools():
    with mock.patch.object(sys, "platform", "linux"), mock.patch(
        "tqclient.sysproxy.subprocess.run", return_value=_completed(127)
    ) as run:
        commands = set_system_proxy(ProxyMode.GLOBAL, PORTS)
    assert commands == []
    assert run.call_count == 2