"""
Parsers for the text emitted by the macOS Wi-Fi and network tools.

Each parser takes captured standard output and returns a value object;
missing fields degrade to None rather than raising.
"""

from .link_state import (
    LinkState,
    WifiGeneration,
    parse_link_state,
    parse_current_ssid,
    parse_channel_descriptor,
    reconcile_ssid,
)
from .neighbors import NeighborNetwork, parse_neighbor_networks
from .path_quality import (
    PathQuality,
    DnsState,
    parse_ping_output,
    parse_router_ip,
    parse_dns_servers,
    parse_query_time,
    build_dns_state,
)

__all__ = [
    "LinkState",
    "WifiGeneration",
    "parse_link_state",
    "parse_current_ssid",
    "parse_channel_descriptor",
    "reconcile_ssid",
    "NeighborNetwork",
    "parse_neighbor_networks",
    "PathQuality",
    "DnsState",
    "parse_ping_output",
    "parse_router_ip",
    "parse_dns_servers",
    "parse_query_time",
    "build_dns_state",
]
