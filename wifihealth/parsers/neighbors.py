"""
Neighboring-network parsing from the adapter scan listing.

The "Other Local Wi-Fi Networks" section of ``system_profiler
SPAirPortDataType`` lists one entry per nearby SSID::

        Other Local Wi-Fi Networks:
                    Neighbor1:
                          PHY Mode: 802.11ax
                          Channel: 6 (2.4GHz, 20MHz)

SSID lines are told apart from property lines only by indentation.
Entries missing a channel are dropped; the listing is advisory.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .link_state import OTHER_NETWORKS_HEADER, infer_band_ghz

log = logging.getLogger("parsers.neighbors")

SECTION_HEADER = OTHER_NETWORKS_HEADER

# Indentation widths of the scan listing
ENTRY_INDENT_MIN = 16
ENTRY_INDENT_MAX = 20
PROPERTY_INDENT = 22

_ENTRY_RE = re.compile(
    r"^[ ]{%d,%d}(\S[^:]*):\s*$" % (ENTRY_INDENT_MIN, ENTRY_INDENT_MAX)
)
_CHANNEL_RE = re.compile(r"Channel:\s*(\d+)(?:\s*\(\s*(\d+(?:\.\d+)?)\s*GHz)?")


@dataclass(frozen=True)
class NeighborNetwork:
    """A nearby access point seen in the scan listing."""

    ssid: str
    channel: int
    frequency_ghz: float

    @property
    def is_24ghz(self) -> bool:
        return self.frequency_ghz < 3.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ssid": self.ssid,
            "channel": self.channel,
            "frequency_ghz": self.frequency_ghz,
        }


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _parse_channel_line(line: str) -> Tuple[Optional[int], Optional[float]]:
    match = _CHANNEL_RE.search(line)
    if not match:
        return None, None
    try:
        channel = int(match.group(1))
    except ValueError:
        return None, None
    frequency = None
    if match.group(2):
        try:
            frequency = float(match.group(2))
        except ValueError:
            frequency = None
    if frequency is None:
        frequency = infer_band_ghz(channel)
    return channel, frequency


def parse_neighbor_networks(output: str) -> List[NeighborNetwork]:
    """Extract nearby networks from a full scan listing.

    Args:
        output: Raw ``system_profiler SPAirPortDataType`` text.

    Returns:
        Networks in listing order; empty when the section is absent.
    """
    networks: List[NeighborNetwork] = []

    start = (output or "").find(SECTION_HEADER)
    if start < 0:
        log.debug("no '%s' section in scan listing", SECTION_HEADER)
        return networks

    # Drop the remainder of the header line itself
    lines = output[start + len(SECTION_HEADER):].splitlines()[1:]

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            i += 1
            continue

        # Anything shallower than an SSID line closes the section
        if _indent(line) < ENTRY_INDENT_MIN:
            break

        entry = _ENTRY_RE.match(line)
        if not entry:
            i += 1
            continue

        ssid = entry.group(1).strip()
        channel: Optional[int] = None
        frequency: Optional[float] = None

        i += 1
        while i < len(lines):
            prop = lines[i]
            if not prop.strip():
                break
            if _ENTRY_RE.match(prop) or _indent(prop) < PROPERTY_INDENT:
                break
            if channel is None:
                channel, frequency = _parse_channel_line(prop)
            i += 1

        if channel is not None and frequency is not None:
            networks.append(NeighborNetwork(ssid, channel, frequency))
        else:
            log.debug("dropping neighbor %r: no channel", ssid)

    log.debug("parsed %d neighbor network(s)", len(networks))
    return networks
