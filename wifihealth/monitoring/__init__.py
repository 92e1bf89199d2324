"""
Snapshot collection, the speed test and the JSON HTTP surface.
"""

from .collector import CollectorSettings, NetworkMetrics, WifiCollector
from .speed_test import SpeedTestResults, run_speed_test

__all__ = [
    "CollectorSettings",
    "NetworkMetrics",
    "SpeedTestResults",
    "WifiCollector",
    "run_speed_test",
]
