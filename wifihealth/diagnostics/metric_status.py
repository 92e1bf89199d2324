"""
Traffic-light status for individual network metrics.

Each classifier maps a raw value to good / warning / bad, and an
absent value to neutral.
"""

from enum import Enum
from typing import Dict, Optional, TYPE_CHECKING

from .interference import InterferenceLevel

if TYPE_CHECKING:
    from ..monitoring.collector import NetworkMetrics
    from ..monitoring.speed_test import SpeedTestResults


class MetricStatus(Enum):
    """Display status of a metric."""

    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"
    NEUTRAL = "neutral"


def signal_status(dbm: Optional[float]) -> MetricStatus:
    if dbm is None:
        return MetricStatus.NEUTRAL
    if dbm > -60:
        return MetricStatus.GOOD
    if dbm >= -75:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def ping_status(ms: Optional[float]) -> MetricStatus:
    if ms is None:
        return MetricStatus.NEUTRAL
    if ms < 20:
        return MetricStatus.GOOD
    if ms <= 100:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def jitter_status(ms: Optional[float]) -> MetricStatus:
    if ms is None:
        return MetricStatus.NEUTRAL
    if ms < 10:
        return MetricStatus.GOOD
    if ms <= 50:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def loss_status(percent: Optional[float]) -> MetricStatus:
    if percent is None:
        return MetricStatus.NEUTRAL
    if percent == 0:
        return MetricStatus.GOOD
    if percent <= 5:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def link_rate_status(mbps: Optional[float]) -> MetricStatus:
    if mbps is None:
        return MetricStatus.NEUTRAL
    if mbps >= 200:
        return MetricStatus.GOOD
    if mbps >= 50:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def snr_status(snr_db: Optional[float]) -> MetricStatus:
    if snr_db is None:
        return MetricStatus.NEUTRAL
    if snr_db >= 25:
        return MetricStatus.GOOD
    if snr_db >= 15:
        return MetricStatus.WARNING
    return MetricStatus.BAD


# Speed-test figures
def download_status(mbps: Optional[float]) -> MetricStatus:
    if mbps is None:
        return MetricStatus.NEUTRAL
    if mbps >= 50:
        return MetricStatus.GOOD
    if mbps >= 10:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def upload_status(mbps: Optional[float]) -> MetricStatus:
    if mbps is None:
        return MetricStatus.NEUTRAL
    if mbps >= 10:
        return MetricStatus.GOOD
    if mbps >= 3:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def speed_latency_status(ms: Optional[float]) -> MetricStatus:
    """Latency to the speed-test server; looser than ping_status."""
    if ms is None:
        return MetricStatus.NEUTRAL
    if ms <= 30:
        return MetricStatus.GOOD
    if ms <= 100:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def interference_status(level: Optional[InterferenceLevel]) -> MetricStatus:
    if level is InterferenceLevel.LOW:
        return MetricStatus.GOOD
    if level is InterferenceLevel.MODERATE:
        return MetricStatus.WARNING
    if level in (InterferenceLevel.HIGH, InterferenceLevel.SEVERE):
        return MetricStatus.BAD
    return MetricStatus.NEUTRAL


def summarize_metrics(metrics: "NetworkMetrics") -> Dict[str, MetricStatus]:
    """Classify every metric in a snapshot.

    Router entries are neutral when no router was discovered.
    """
    wifi = metrics.wifi
    router = metrics.router_ping
    internet = metrics.internet_ping
    return {
        "signal": signal_status(wifi.signal_dbm),
        "link_rate": link_rate_status(wifi.link_rate_mbps),
        "router_latency": ping_status(router.latency_ms if router else None),
        "router_jitter": jitter_status(router.jitter_ms if router else None),
        "router_loss": loss_status(router.packet_loss_percent if router else None),
        "internet_latency": ping_status(internet.latency_ms if internet else None),
        "internet_jitter": jitter_status(internet.jitter_ms if internet else None),
        "internet_loss": loss_status(
            internet.packet_loss_percent if internet else None
        ),
        "dns_lookup": ping_status(metrics.dns.lookup_latency_ms),
    }


def summarize_speed_test(results: "SpeedTestResults") -> Dict[str, MetricStatus]:
    return {
        "download": download_status(results.download_mbps),
        "upload": upload_status(results.upload_mbps),
        "latency": speed_latency_status(results.latency_ms),
        "jitter": jitter_status(results.jitter_ms),
    }
