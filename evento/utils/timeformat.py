"""Display formatting for event times."""

from datetime import datetime
from typing import Optional, Union

INVALID_DATE = 'Invalid Date'


def format_event_time(value: Optional[Union[datetime, str]]) -> str:
    """
    Format an event time as 'YYYY-MM-DD HH:mm AM/PM'.

    The hour stays on the 24-hour clock; the AM/PM marker is appended as is.
    Strings are parsed as ISO-8601. Missing or unparseable values give 'Invalid Date'.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return INVALID_DATE
    if not isinstance(value, datetime):
        return INVALID_DATE
    return value.strftime('%Y-%m-%d %H:%M ') + ('AM' if value.hour < 12 else 'PM')
