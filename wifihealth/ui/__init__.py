"""Terminal rendering of wifi-health snapshots."""

from .report import print_report, render_report

__all__ = ["print_report", "render_report"]
