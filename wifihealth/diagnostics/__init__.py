"""
Diagnostics for Wi-Fi health.

Provides interference scoring with remediation suggestions and
per-metric status classification.
"""

from .interference import (
    InterferenceAnalyzer,
    InterferenceLevel,
    InterferenceVerdict,
    SnrQuality,
)
from .metric_status import MetricStatus, summarize_metrics

__all__ = [
    "InterferenceAnalyzer",
    "InterferenceLevel",
    "InterferenceVerdict",
    "SnrQuality",
    "MetricStatus",
    "summarize_metrics",
]
