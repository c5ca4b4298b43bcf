"""
Helper Functions

Contains utility functions used throughout the application.
"""

from datetime import date, datetime
from typing import Dict, Optional


def todays_key(now: Optional[datetime] = None) -> int:
    """Epoch seconds of local midnight today."""
    now = now or datetime.now()
    return day_key_for(now.date())


def day_key_for(day: date) -> int:
    """Epoch seconds of local midnight on ``day``."""
    return int(datetime(day.year, day.month, day.day).timestamp())


def date_for_key(day_key: int) -> date:
    """Local calendar date a day-key falls on."""
    return datetime.fromtimestamp(day_key).date()


def days_between(later_key: int, earlier_key: int) -> int:
    """Whole calendar days from ``earlier_key`` to ``later_key``."""
    return (date_for_key(later_key) - date_for_key(earlier_key)).days


def get_user_identity(request_obj) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'user_agent': str(getattr(request_obj, 'user_agent', '') or '') or None
    }
