"""Utility functions for liftpal."""

from .dates import format_short_date, start_of_week, streak_length

__all__ = ["format_short_date", "start_of_week", "streak_length"]
