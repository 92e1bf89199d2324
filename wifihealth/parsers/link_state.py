"""
Link-state parsing for the current Wi-Fi association.

Turns the adapter-status text (``system_profiler SPAirPortDataType``)
and the lighter-weight current-network query
(``networksetup -getairportnetwork``) into a :class:`LinkState`.

Every field is extracted independently.  A pattern that does not match,
or a number that does not convert, leaves only that field empty; the
parser itself never raises.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

log = logging.getLogger("parsers.link_state")

NOT_ASSOCIATED = "You are not associated with an AirPort network."
OTHER_NETWORKS_HEADER = "Other Local Wi-Fi Networks:"

# Values never continue onto the next line: [ \t] rather than \s after colons
_CURRENT_SSID_RE = re.compile(r"Current Wi-Fi Network:[ \t]*([^\n]+)")
_CURRENT_NETWORK_RE = re.compile(r"^[ \t]*Current Network Information:[ \t]*$", re.MULTILINE)
# The line right after the header, when it is a bare "<ssid>:" sub-header
_SSID_LINE_RE = re.compile(r"\n[ \t]+([^\n:]+):[ \t]*$", re.MULTILINE)
_PHY_MODE_RE = re.compile(r"^[ \t]*PHY Mode:[ \t]*(\S[^\n]*)$", re.MULTILINE)
_CHANNEL_RE = re.compile(
    r"^[ \t]*Channel:[ \t]*(\d+)"
    r"(?:[ \t]*\([ \t]*(\d+(?:\.\d+)?)[ \t]*GHz[ \t]*,[ \t]*(\d+)[ \t]*MHz[ \t]*\))?",
    re.MULTILINE,
)
_TX_RATE_RE = re.compile(r"Transmit Rate:[ \t]*([\d.]+)")
_SIGNAL_NOISE_RE = re.compile(
    r"Signal / Noise:[ \t]*(-?\d+)[ \t]*dBm[ \t]*/[ \t]*(-?\d+)[ \t]*dBm"
)

# Canonical descriptor readers
_DESCRIPTOR_CHANNEL_RE = re.compile(r"ch\s*(\d+)")
_DESCRIPTOR_GHZ_RE = re.compile(r"(\d+(?:\.\d+)?)\s*GHz")

# Highest channel number in the 2.4 GHz band
MAX_24GHZ_CHANNEL = 14


class WifiGeneration(Enum):
    """Radio generation derived from the reported PHY mode."""

    WIFI4 = "Wi-Fi 4"
    WIFI5 = "Wi-Fi 5"
    WIFI6 = "Wi-Fi 6"


@dataclass(frozen=True)
class LinkState:
    """Current association state of the Wi-Fi adapter."""

    connected: bool = False
    ssid: Optional[str] = None
    # WifiGeneration, or the raw PHY mode string when unrecognised
    frequency_band: Optional[Union[WifiGeneration, str]] = None
    channel_descriptor: Optional[str] = None
    channel_number: Optional[int] = None
    channel_frequency_ghz: Optional[float] = None
    link_rate_mbps: Optional[float] = None
    signal_dbm: Optional[int] = None
    noise_dbm: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        band = self.frequency_band
        if isinstance(band, WifiGeneration):
            band = band.value
        return {
            "connected": self.connected,
            "ssid": self.ssid,
            "frequency_band": band,
            "channel_descriptor": self.channel_descriptor,
            "channel_number": self.channel_number,
            "channel_frequency_ghz": self.channel_frequency_ghz,
            "link_rate_mbps": self.link_rate_mbps,
            "signal_dbm": self.signal_dbm,
            "noise_dbm": self.noise_dbm,
        }


def infer_band_ghz(channel: int) -> float:
    """Return 2.4 for channels 1-14 and 5.0 for everything above."""
    return 2.4 if channel <= MAX_24GHZ_CHANNEL else 5.0


def _clean_ssid(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value == NOT_ASSOCIATED:
        return None
    return value


def _to_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def _to_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def _format_ghz(text: str) -> str:
    """Render a GHz figure the way the adapter tool prints it ("5", "2.4")."""
    value = _to_float(text)
    if value is None:
        return text
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def parse_current_ssid(output: str) -> Optional[str]:
    """Parse ``networksetup -getairportnetwork`` output.

    Returns None when the adapter is not associated or the output does
    not name a network.
    """
    match = _CURRENT_SSID_RE.search(output or "")
    if not match:
        return None
    return _clean_ssid(match.group(1))


def classify_phy_mode(phy_mode: str) -> Union[WifiGeneration, str]:
    """Map a free-text PHY mode to a Wi-Fi generation.

    Checks run newest generation first; anything unrecognised is kept
    verbatim.
    """
    phy_mode = phy_mode.strip()
    if "802.11ax" in phy_mode or "Wi-Fi 6" in phy_mode:
        return WifiGeneration.WIFI6
    if "802.11ac" in phy_mode or "Wi-Fi 5" in phy_mode:
        return WifiGeneration.WIFI5
    if "802.11n" in phy_mode:
        return WifiGeneration.WIFI4
    return phy_mode


def format_channel_descriptor(
    channel: int,
    ghz: Optional[str] = None,
    width_mhz: Optional[str] = None,
) -> str:
    """Build the canonical channel descriptor.

    ``ch 149, 5 GHz, 80 MHz`` when band and width are known, otherwise
    ``ch 6, 2.4 GHz`` with the band inferred from the channel number.
    """
    if ghz is not None and width_mhz is not None:
        return f"ch {channel}, {_format_ghz(ghz)} GHz, {int(width_mhz)} MHz"
    return f"ch {channel}, {_format_ghz(str(infer_band_ghz(channel)))} GHz"


def parse_channel_descriptor(
    descriptor: Optional[str],
) -> Tuple[Optional[int], Optional[float]]:
    """Recover ``(channel, ghz)`` from a canonical channel descriptor."""
    if not descriptor:
        return None, None

    match = _DESCRIPTOR_CHANNEL_RE.search(descriptor)
    if not match:
        return None, None
    channel = int(match.group(1))

    ghz_match = _DESCRIPTOR_GHZ_RE.search(descriptor)
    frequency = _to_float(ghz_match.group(1)) if ghz_match else None
    if frequency is None:
        frequency = infer_band_ghz(channel)
    return channel, frequency


def reconcile_ssid(
    authoritative: Optional[str],
    from_status: Optional[str],
) -> Optional[str]:
    """Merge the two SSID sources.

    The current-network query is authoritative: when it names a network
    that value wins outright.  The adapter-status section header is
    only consulted when the query produced nothing.
    """
    ssid = _clean_ssid(authoritative)
    if ssid is not None:
        return ssid
    return _clean_ssid(from_status)


def _extract_phy_mode(text: str) -> Optional[Union[WifiGeneration, str]]:
    match = _PHY_MODE_RE.search(text)
    if not match:
        return None
    return classify_phy_mode(match.group(1))


def _extract_channel(text: str) -> Optional[str]:
    match = _CHANNEL_RE.search(text)
    if not match:
        return None
    channel = _to_int(match.group(1))
    if channel is None:
        return None
    return format_channel_descriptor(channel, match.group(2), match.group(3))


def _extract_link_rate(text: str) -> Optional[float]:
    match = _TX_RATE_RE.search(text)
    if not match:
        return None
    return _to_float(match.group(1))


def _extract_signal_noise(text: str) -> Tuple[Optional[int], Optional[int]]:
    match = _SIGNAL_NOISE_RE.search(text)
    if not match:
        return None, None
    return _to_int(match.group(1)), _to_int(match.group(2))


def parse_link_state(
    status_output: str,
    current_ssid: Optional[str] = None,
) -> LinkState:
    """Build a :class:`LinkState` from adapter-status text.

    Args:
        status_output: Raw ``system_profiler SPAirPortDataType`` text.
        current_ssid:  SSID from the current-network query, already
                       parsed.  Takes precedence over the blob.

    Returns:
        LinkState; fully default (disconnected) for empty input.
    """
    status_output = status_output or ""

    header = _CURRENT_NETWORK_RE.search(status_output)
    blob_ssid = None
    # Link fields live between the current-network header and the scan
    # listing; the preamble has look-alikes ("AirDrop Channel").
    section = ""
    if header:
        ssid_line = _SSID_LINE_RE.match(status_output, header.end())
        blob_ssid = ssid_line.group(1) if ssid_line else None
        end = status_output.find(OTHER_NETWORKS_HEADER, header.end())
        section = status_output[header.start():end if end >= 0 else None]

    ssid = reconcile_ssid(current_ssid, blob_ssid)

    channel_descriptor = _extract_channel(section)
    channel_number, channel_ghz = parse_channel_descriptor(channel_descriptor)
    signal_dbm, noise_dbm = _extract_signal_noise(section)

    state = LinkState(
        connected=ssid is not None,
        ssid=ssid,
        frequency_band=_extract_phy_mode(section),
        channel_descriptor=channel_descriptor,
        channel_number=channel_number,
        channel_frequency_ghz=channel_ghz,
        link_rate_mbps=_extract_link_rate(section),
        signal_dbm=signal_dbm,
        noise_dbm=noise_dbm,
    )
    log.debug(
        "link state: ssid=%r signal=%s noise=%s channel=%r rate=%s",
        state.ssid, state.signal_dbm, state.noise_dbm,
        state.channel_descriptor, state.link_rate_mbps,
    )
    return state
