"""Utility helpers."""

from .time import current_time, utc_now

__all__ = ["current_time", "utc_now"]
