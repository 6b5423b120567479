"""Numeric helper functions shared across the application."""

from __future__ import annotations


def percent_to_decimal(value: float) -> float:
    """Convert a percentage input (``8.5`` meaning 8.5%) to a decimal."""
    return float(value) / 100.0


__all__ = ["percent_to_decimal"]
