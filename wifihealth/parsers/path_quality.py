"""
Path-quality parsing: router discovery, ping statistics and DNS.

All parsers here take already-captured command output.  Missing or
malformed values come back as None; nothing is raised.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

log = logging.getLogger("parsers.path_quality")

_ROUTER_RE = re.compile(r"^[ \t]*Router:[ \t]*([0-9A-Fa-f.:]+)[ \t]*$", re.MULTILINE)
_PACKET_LOSS_RE = re.compile(r"([\d.]+)% packet loss")
_PING_STATS_RE = re.compile(
    r"(?:round-trip|rtt) min/avg/max/(?:stddev|mdev) = "
    r"([\d.]+)/([\d.]+)/([\d.]+)/([\d.]+)"
)
_DNS_SERVER_RE = re.compile(r"nameserver\[\d+\][ \t]*:[ \t]*(\S+)")
_QUERY_TIME_RE = re.compile(r"Query time:[ \t]*(\d+)[ \t]*msec")


@dataclass(frozen=True)
class PathQuality:
    """Round-trip statistics for one ping target."""

    latency_ms: Optional[float] = None
    jitter_ms: Optional[float] = None
    packet_loss_percent: Optional[float] = None

    @property
    def is_unknown(self) -> bool:
        return (
            self.latency_ms is None
            and self.jitter_ms is None
            and self.packet_loss_percent is None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latency_ms": self.latency_ms,
            "jitter_ms": self.jitter_ms,
            "packet_loss_percent": self.packet_loss_percent,
        }


@dataclass(frozen=True)
class DnsState:
    """Configured resolvers and lookup latency against the first one."""

    servers: Tuple[str, ...] = field(default_factory=tuple)
    lookup_latency_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "servers": list(self.servers),
            "lookup_latency_ms": self.lookup_latency_ms,
        }


def _to_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def parse_router_ip(output: str) -> Optional[str]:
    """Return the ``Router:`` address from ``networksetup -getinfo``."""
    match = _ROUTER_RE.search(output or "")
    if not match:
        return None
    return match.group(1)


def parse_ping_output(output: str) -> PathQuality:
    """Parse ping output into latency, jitter and packet loss.

    The average round trip becomes the latency and the standard
    deviation the jitter.  With no statistics line (every probe lost)
    only the loss figure is reported.
    """
    output = output or ""

    loss = None
    match = _PACKET_LOSS_RE.search(output)
    if match:
        loss = _to_float(match.group(1))

    latency = jitter = None
    match = _PING_STATS_RE.search(output)
    if match:
        latency = _to_float(match.group(2))
        jitter = _to_float(match.group(4))

    return PathQuality(
        latency_ms=latency,
        jitter_ms=jitter,
        packet_loss_percent=loss,
    )


def parse_dns_servers(output: str) -> List[str]:
    """List every ``nameserver[n]`` address across all resolver stanzas.

    First-seen order is kept and repeats are dropped.
    """
    servers: List[str] = []
    for match in _DNS_SERVER_RE.finditer(output or ""):
        server = match.group(1)
        if server not in servers:
            servers.append(server)
    return servers


def parse_query_time(output: str) -> Optional[float]:
    """Return the ``Query time`` reported by dig, in milliseconds."""
    match = _QUERY_TIME_RE.search(output or "")
    if not match:
        return None
    return _to_float(match.group(1))


def build_dns_state(
    resolver_output: str,
    lookup_output: Optional[str] = None,
) -> DnsState:
    """Combine resolver listing and lookup timing into a :class:`DnsState`.

    Args:
        resolver_output: ``scutil --dns`` text.
        lookup_output:   dig output for the query sent to the first
                         server, or None if the lookup failed.
    """
    servers = parse_dns_servers(resolver_output)
    latency = None
    if servers and lookup_output:
        latency = parse_query_time(lookup_output)
    log.debug("dns: servers=%s lookup=%s", servers, latency)
    return DnsState(servers=tuple(servers), lookup_latency_ms=latency)
