"""Parsing of comma-separated ``host[:port]`` lists."""

from typing import NamedTuple

from redisconn.errors import ConfigurationError

DEFAULT_PORT = 6379


class HostPort(NamedTuple):
    """One Redis node address."""

    host: str
    port: int


def _parse_entry(entry: str) -> HostPort:
    if entry.startswith("["):
        # IPv6 literal: [addr] or [addr]:port
        addr, sep, rest = entry[1:].partition("]")
        if not sep or not addr:
            raise ConfigurationError(f"Invalid host entry: {entry!r}")
        port_text = rest[1:] if rest.startswith(":") else rest
        host = addr
    else:
        host, _, port_text = entry.partition(":")
        if not host:
            raise ConfigurationError(f"Invalid host entry: {entry!r}")

    if not port_text:
        return HostPort(host, DEFAULT_PORT)

    try:
        port = int(port_text)
    except ValueError as e:
        raise ConfigurationError(f"Invalid port in host entry: {entry!r}") from e
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"Port out of range in host entry: {entry!r}")
    return HostPort(host, port)


def parse_hosts(hosts: str | None) -> list[HostPort]:
    """Parse a host list such as ``"h1:7000,h2:7001"``.

    Blank entries are skipped and a missing port defaults to 6379.

    Args:
        hosts: Comma-separated ``host[:port]`` entries.

    Returns:
        Host/port pairs in the order given.

    Raises:
        ConfigurationError: If no usable entry is present or an entry is malformed.
    """
    if hosts is None:
        raise ConfigurationError("Host must not be null")

    nodes = [_parse_entry(entry.strip()) for entry in hosts.split(",") if entry.strip()]
    if not nodes:
        raise ConfigurationError(f"No Redis hosts found in {hosts!r}")
    return nodes
