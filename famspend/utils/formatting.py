import math
from datetime import datetime
from zoneinfo import ZoneInfo

from ..core.config import settings

TIMEZONE = ZoneInfo(settings.DISPLAY_TIMEZONE)


def format_number(value: float | None, currency: str | None = None) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    code = currency or settings.CURRENCY
    sign = "-" if value < 0 else ""
    return f"{sign}{code} {abs(value):,.2f}"


def _parse(iso_string: str) -> datetime:
    dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=ZoneInfo("UTC"))
    return dt.astimezone(TIMEZONE)


def format_date(iso_string: str | None) -> str:
    if not iso_string:
        return ""
    return _parse(iso_string).strftime("%m/%d/%y")


def format_time(iso_string: str | None) -> str:
    if not iso_string:
        return ""
    return _parse(iso_string).strftime("%I:%M %p")
