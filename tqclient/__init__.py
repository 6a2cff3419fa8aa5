"""Text, validation, routing-rule, system-proxy and route-table helpers for a desktop proxy client."""

__version__ = "1.4.0"