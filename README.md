# tqclient

Building blocks for a desktop proxy client. The package does not carry any traffic. It prepares, checks and applies the settings that sit around a local SOCKS5/HTTP proxy: text formats, input validation, routing rule files, the desktop's system proxy and the route table used in full-tunnel mode.

## Modules

### `tqclient.textutils`

- `base64url_encode(text)` encodes text as URL-safe base64 and drops the padding. `base64url_decode(encoded)` decodes URL-safe or standard base64. Missing padding and stray characters are tolerated, and undecodable input gives `""`.
- `split_lines(text)` splits on CR or LF and drops empty pieces.
- `to_camel_case(text)` capitalises the first letter of every space-separated word.
- `to_compact_json(obj)` produces compact JSON with the keys sorted.
- `format_bytes(size)` returns a size with two decimals in B, KB, MB, GB or TB, using 1024 steps.
- `config_path()` returns the configuration directory: `~/.config/trojan-qt5`, or the program's directory on Windows. `log_dir()` returns the platform's log directory.
- `WsHeader(key, value)` holds one websocket header. `headers_to_dict(headers)` converts a list of them to a dict, and later keys win. `headers_from_dict(mapping)` converts a dict back, ordered by key, and turns non-string values into `""`.

### `tqclient.validators`

- `validate_ipv4(text)` returns a `ValidationState` (`ACCEPTABLE`, `INTERMEDIATE` or `INVALID`) for IPv4 text while it is still being typed. Empty text is acceptable.
- `is_valid_port(text)` is true for empty text or for an unsigned number up to 65535. `validate_port(text)` gives the same answer as a `ValidationState`.
- `port_in_use(port, ipv6=False, share_over_lan=False)` tries to bind and listen on the port. It uses the loopback address, or the wildcard address when `share_over_lan` is set. It returns the error text, or `""` if the port is free.

### `tqclient.subscription`

`Subscription(url, group_name, last_update_time)` is a dataclass. `to_bytes()` writes big-endian, length-prefixed UTF-16 strings followed by a 64-bit time. `Subscription.from_bytes(data)` reads that format back and raises `ValueError` on truncated or malformed data.

### `tqclient.routing`

- `RouterSettings` holds a domain strategy and domain and IP rule lists for direct, proxy and block.
- `parse_router_settings(obj)` builds settings from a rules object, and parts that are missing or of the wrong type become empty. `export_router_settings(settings)` goes the other way.
- `load_rules(path)` reads a `rules.json` file. Invalid JSON gives empty settings. `save_rules(path, settings)` writes the file as indented JSON.
- `lines_from_text(text)` turns edited text into rule lines and skips blank ones. `text_from_lines(lines)` joins the lines, ending each with CRLF.

### `tqclient.stream`

- `parse_ws_headers(text)` reads `key|value` lines. A line without `|` is used as both key and value. `format_ws_headers(headers)` writes the lines back.
- `parse_list_text(text)` and `format_list_text(items)` convert between multi-line fields and lists, such as ALPN, hosts or plugin arguments.
- `is_checked(state)` is true for the fully checked check-box state, `2`.

### `tqclient.sysproxy`

`ProxyMode` is `OFF`, `GLOBAL` or `PAC`. `LocalPorts(socks5_port, http_port, pac_port, enable_http_mode=False)` describes the local listeners.

- `gnome_commands(mode, ports)`, `kde_commands(mode, ports)` and `mac_commands(mode, ports)` build the shell commands for each desktop. They do not run them.
- `run_shell(command)` runs a command and returns its standard output.
- `set_system_proxy(mode, ports)` applies the mode and returns the commands it ran:
  - On Linux it uses `gsettings` if that tool is present, otherwise `kwriteconfig5`.
  - On macOS it calls a proxy helper that must already be installed at `/Library/Application Support/Trojan-Qt5/proxy_conf_helper`.
  - On Windows it writes the Internet Settings registry values and returns an empty list.

### `tqclient.routes`

- `tun_settings(platform, socks_port)` returns a `TunSettings` (name, address, gateway, DNS, proxy server) describing the TUN device.
- `tun_setup_commands(platform)` returns the `ip` commands that create the device on Linux.
- `set_route_commands(platform, server_ip, gateway)` and `reset_route_commands(platform, server_ip, gateway)` build the route changes. While the routes are set, default traffic goes to the TUN device, and the server and LAN ranges go through the original gateway.
- `RouteTable(server_address, platform=None, gateway=None)` applies the changes:
  - `set()` resolves a host name first, then runs the commands.
  - `reset()` undoes them.
  - Both return the commands that were run.
- `default_gateway(platform)`, `is_domain(address)` and `has_root_privileges()` are helpers.

## Example

```python
from tqclient.textutils import base64url_encode, format_bytes
from tqclient.routing import RouterSettings, save_rules, load_rules
from tqclient.validators import validate_ipv4

base64url_encode("hello")          # 'aGVsbG8'
format_bytes(1536)                 # '1.50 KB'
validate_ipv4("192.168.")          # ValidationState.INTERMEDIATE

rules = RouterSettings(domain_strategy="AsIs", domain_direct=["example.com"])
save_rules("rules.json", rules)
assert load_rules("rules.json") == rules
```

Changing the system proxy or the route table runs the platform tools a desktop user would run: `gsettings`, `kwriteconfig5`, `ip` or `route`. Route changes need root privileges.

## What it does not do

- It contains no proxy engine: no SOCKS5, HTTP, Shadowsocks, VMess or Trojan client and no tun2socks. `tun_settings` only describes the device that such an engine would use.
- It does not download subscriptions or parse share links.
- It does not read or write the main configuration file.
- It has no graphical interface and no command-line program. It is a library to be called from Python.