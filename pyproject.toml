[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tqclient"
version = "1.4.0"
description = "Settings, validation and system integration helpers for a desktop proxy client: text utilities, validators, routing rules, system proxy and route table management"
requires-python = ">=3.10"
dependencies = []
keywords = ["proxy", "socks5", "routing", "system-proxy", "tun", "pac", "gsettings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tqclient"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
