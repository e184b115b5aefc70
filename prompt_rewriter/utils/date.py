"""Utility functions for date and time handling."""

from datetime import datetime
from zoneinfo import ZoneInfo


def get_current_year() -> int:
    """Get the current UTC year, used to keep search queries fresh."""
    return datetime.now(ZoneInfo("UTC")).year
