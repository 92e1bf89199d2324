"""
wifi-health - local Wi-Fi health diagnostics

Turns the text output of the macOS network tools into a normalized
network-quality snapshot and scores it for signal quality, channel
congestion and interference, with remediation suggestions.

This package provides:
- Resilient parsers for link state, nearby networks, ping and DNS output
- Deterministic interference scoring
- Per-metric status classification
- Concurrent snapshot collection and a JSON HTTP surface

License: GPL-3.0
"""

__version__ = "0.3.0-Beta"
__license__ = "GPL-3.0"

from .parsers import (
    LinkState,
    NeighborNetwork,
    PathQuality,
    DnsState,
    parse_link_state,
    parse_neighbor_networks,
    parse_ping_output,
    build_dns_state,
)
from .diagnostics import InterferenceAnalyzer, InterferenceVerdict, summarize_metrics
from .monitoring import NetworkMetrics, WifiCollector

__all__ = [
    "LinkState",
    "NeighborNetwork",
    "PathQuality",
    "DnsState",
    "parse_link_state",
    "parse_neighbor_networks",
    "parse_ping_output",
    "build_dns_state",
    "InterferenceAnalyzer",
    "InterferenceVerdict",
    "summarize_metrics",
    "NetworkMetrics",
    "WifiCollector",
]
