"""
Wi-Fi interference analysis.

Fuses the current link state with the neighboring-network scan into an
interference verdict: SNR and its quality band, co-channel and
overlapping-channel counts, an ordinal interference level, and an
ordered list of remediation suggestions.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from ..parsers.link_state import LinkState, infer_band_ghz
from ..parsers.neighbors import NeighborNetwork
from ..utils.common import valid_section_values

log = logging.getLogger("diagnostics.interference")

MSG_MOVE_CLOSER = "Move closer to your router or remove physical obstructions"
MSG_SAME_CHANNEL = (
    "{count} networks on the same channel. "
    "Consider changing to a less congested channel"
)
MSG_MANY_OVERLAPPING = "Many overlapping networks. Try using 5 GHz if available"
MSG_SWITCH_TO_5GHZ = "Consider switching to 5 GHz band for less interference"
MSG_NON_STANDARD_CHANNEL = (
    "Channel {channel} overlaps with neighbors. "
    "Use channel 1, 6, or 11 on 2.4 GHz"
)
MSG_LOOKS_GOOD = "Your Wi-Fi environment looks good!"
MSG_NO_ISSUES = "No major issues detected"


class SnrQuality(Enum):
    """SNR quality band."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    VERY_POOR = "Very Poor"
    UNKNOWN = "Unknown"


class InterferenceLevel(Enum):
    """Overall interference verdict."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    SEVERE = "Severe"


@dataclass(frozen=True)
class InterferenceVerdict:
    """Result of an interference analysis."""

    snr_db: Optional[int]
    snr_quality: SnrQuality
    current_channel: Optional[int]
    current_frequency_ghz: Optional[float]
    same_channel_count: int
    overlapping_count: int
    interference_level: InterferenceLevel
    suggestions: Tuple[str, ...]
    neighbors: Tuple[NeighborNetwork, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "snr_db": self.snr_db,
            "snr_quality": self.snr_quality.value,
            "current_channel": self.current_channel,
            "current_frequency_ghz": self.current_frequency_ghz,
            "same_channel_count": self.same_channel_count,
            "overlapping_count": self.overlapping_count,
            "neighbors": [n.to_dict() for n in self.neighbors],
            "interference_level": self.interference_level.value,
            "suggestions": list(self.suggestions),
        }


class InterferenceAnalyzer:
    """
    Scores Wi-Fi interference from link state and nearby networks.

    The analyzer keeps no state between calls; :meth:`analyze` is a
    pure function of its arguments and the configured thresholds.
    """

    # SNR thresholds (dB), inclusive lower bounds
    SNR_EXCELLENT = 40
    SNR_GOOD = 25
    SNR_FAIR = 15
    SNR_POOR = 10
    # Below 10 is VERY_POOR

    # Frequencies below this are 2.4 GHz, everything else 5 GHz
    BAND_SPLIT_GHZ = 3.0

    # Overlap heuristics
    CHANNEL_DELTA_24GHZ = 5
    CENTER_DELTA_5GHZ_MHZ = 40.0

    NON_OVERLAPPING_24GHZ = (1, 6, 11)
    MIN_5GHZ_NEIGHBORS = 3

    def __init__(
        self,
        channel_delta_24ghz: Optional[int] = None,
        center_delta_5ghz_mhz: Optional[float] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            channel_delta_24ghz:   2.4 GHz neighbors closer than this many
                                   channels count as overlapping.
            center_delta_5ghz_mhz: 5 GHz neighbors whose centre frequency
                                   is closer than this count as overlapping.
        """
        self.channel_delta_24ghz = (
            channel_delta_24ghz
            if channel_delta_24ghz is not None
            else self.CHANNEL_DELTA_24GHZ
        )
        self.center_delta_5ghz_mhz = (
            center_delta_5ghz_mhz
            if center_delta_5ghz_mhz is not None
            else self.CENTER_DELTA_5GHZ_MHZ
        )

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]]) -> "InterferenceAnalyzer":
        """Build an analyzer from the ``analyzer`` section of a config dict.

        Missing or non-positive values fall back to the class defaults.
        """
        return cls(**valid_section_values(cfg, "analyzer"))

    @staticmethod
    def compute_snr(
        signal_dbm: Optional[int],
        noise_dbm: Optional[int],
    ) -> Optional[int]:
        """Signal minus noise, or None unless both are known."""
        if signal_dbm is None or noise_dbm is None:
            return None
        return signal_dbm - noise_dbm

    def classify_snr(self, snr: Optional[int]) -> SnrQuality:
        """
        Classify SNR into a quality band.

        Args:
            snr: Signal-to-noise ratio in dB, or None

        Returns:
            SnrQuality classification
        """
        if snr is None:
            return SnrQuality.UNKNOWN
        if snr >= self.SNR_EXCELLENT:
            return SnrQuality.EXCELLENT
        elif snr >= self.SNR_GOOD:
            return SnrQuality.GOOD
        elif snr >= self.SNR_FAIR:
            return SnrQuality.FAIR
        elif snr >= self.SNR_POOR:
            return SnrQuality.POOR
        else:
            return SnrQuality.VERY_POOR

    @staticmethod
    def channel_center_mhz_5ghz(channel: int) -> float:
        """Centre frequency of a 5 GHz channel in MHz."""
        return 5000.0 + channel * 5.0

    def is_24ghz(self, frequency_ghz: float) -> bool:
        return frequency_ghz < self.BAND_SPLIT_GHZ

    def channel_congestion(
        self,
        channel: Optional[int],
        frequency_ghz: Optional[float],
        neighbors: Sequence[NeighborNetwork],
    ) -> Tuple[int, int]:
        """
        Count co-channel and overlapping neighbors.

        Args:
            channel:       Own channel number, or None
            frequency_ghz: Own band in GHz (inferred from channel if None)
            neighbors:     Nearby networks

        Returns:
            (same_channel_count, overlapping_count); both zero when the
            own channel is unknown.  Cross-band neighbors never count.
        """
        if channel is None:
            return 0, 0
        if frequency_ghz is None:
            frequency_ghz = infer_band_ghz(channel)
        own_24ghz = self.is_24ghz(frequency_ghz)
        own_center = self.channel_center_mhz_5ghz(channel)

        same = 0
        overlapping = 0
        for neighbor in neighbors:
            their_24ghz = self.is_24ghz(neighbor.frequency_ghz)
            if neighbor.channel == channel:
                same += 1
            elif own_24ghz and their_24ghz:
                if abs(neighbor.channel - channel) < self.channel_delta_24ghz:
                    overlapping += 1
            elif not own_24ghz and not their_24ghz:
                their_center = self.channel_center_mhz_5ghz(neighbor.channel)
                if abs(own_center - their_center) < self.center_delta_5ghz_mhz:
                    overlapping += 1

        return same, overlapping

    def snr_score(self, snr: Optional[int]) -> int:
        """SNR contribution to the interference score (0-3)."""
        if snr is None:
            return 1
        if snr >= self.SNR_EXCELLENT:
            return 0
        elif snr >= self.SNR_GOOD:
            return 1
        elif snr >= self.SNR_FAIR:
            return 2
        return 3

    @staticmethod
    def congestion_score(same_channel: int, overlapping: int) -> int:
        """Congestion contribution to the interference score (0-3).

        Cases are tried in order and the first match wins.
        """
        if same_channel == 0 and overlapping == 0:
            return 0
        if same_channel == 0 and overlapping <= 2:
            return 1
        if same_channel <= 1:
            return 1
        if same_channel <= 2 and overlapping <= 3:
            return 2
        return 3

    def classify_interference(
        self,
        snr: Optional[int],
        same_channel: int,
        overlapping: int,
    ) -> InterferenceLevel:
        """Combine SNR and congestion sub-scores into a level."""
        total = self.snr_score(snr) + self.congestion_score(same_channel, overlapping)
        if total <= 1:
            return InterferenceLevel.LOW
        elif total <= 3:
            return InterferenceLevel.MODERATE
        elif total <= 5:
            return InterferenceLevel.HIGH
        return InterferenceLevel.SEVERE

    def _generate_suggestions(
        self,
        snr: Optional[int],
        snr_quality: SnrQuality,
        channel: Optional[int],
        frequency_ghz: Optional[float],
        same_channel: int,
        overlapping: int,
        neighbors: Sequence[NeighborNetwork],
    ) -> Tuple[str, ...]:
        """Build the ordered suggestion list; never empty."""
        suggestions = []

        if snr is not None and snr < self.SNR_FAIR:
            suggestions.append(MSG_MOVE_CLOSER)

        if same_channel >= 2:
            suggestions.append(MSG_SAME_CHANNEL.format(count=same_channel))

        if overlapping >= 3:
            suggestions.append(MSG_MANY_OVERLAPPING)

        on_24ghz = frequency_ghz is not None and self.is_24ghz(frequency_ghz)
        if on_24ghz:
            on_5ghz = sum(1 for n in neighbors if not self.is_24ghz(n.frequency_ghz))
            if on_5ghz < self.MIN_5GHZ_NEIGHBORS:
                suggestions.append(MSG_SWITCH_TO_5GHZ)

        if (
            on_24ghz
            and channel is not None
            and channel not in self.NON_OVERLAPPING_24GHZ
        ):
            suggestions.append(MSG_NON_STANDARD_CHANNEL.format(channel=channel))

        if (
            snr_quality is SnrQuality.EXCELLENT
            and same_channel == 0
            and overlapping <= 1
        ):
            suggestions.append(MSG_LOOKS_GOOD)

        if not suggestions:
            suggestions.append(MSG_NO_ISSUES)

        return tuple(suggestions)

    def analyze(
        self,
        link: LinkState,
        neighbors: Sequence[NeighborNetwork],
    ) -> InterferenceVerdict:
        """
        Analyze interference for the current link.

        Args:
            link:      Current link state
            neighbors: Networks from the scan listing

        Returns:
            InterferenceVerdict with level and suggestions
        """
        snr = self.compute_snr(link.signal_dbm, link.noise_dbm)
        snr_quality = self.classify_snr(snr)

        channel = link.channel_number
        frequency = link.channel_frequency_ghz
        if channel is not None and frequency is None:
            frequency = infer_band_ghz(channel)

        same, overlapping = self.channel_congestion(channel, frequency, neighbors)
        level = self.classify_interference(snr, same, overlapping)
        suggestions = self._generate_suggestions(
            snr, snr_quality, channel, frequency, same, overlapping, neighbors,
        )

        log.debug(
            "interference: snr=%s (%s) same=%d overlap=%d level=%s",
            snr, snr_quality.value, same, overlapping, level.value,
        )

        return InterferenceVerdict(
            snr_db=snr,
            snr_quality=snr_quality,
            current_channel=channel,
            current_frequency_ghz=frequency,
            same_channel_count=same,
            overlapping_count=overlapping,
            interference_level=level,
            suggestions=suggestions,
            neighbors=tuple(neighbors),
        )
