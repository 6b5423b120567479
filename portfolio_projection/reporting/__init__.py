"""Persist projection results to disk."""

from .report_generator import ReportGenerator

__all__ = ["ReportGenerator"]
