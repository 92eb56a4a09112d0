import pytz

from datetime import datetime

DISPLAY_TIMEZONE = pytz.timezone('Europe/London')

TIMESTAMP_DISPLAY_FORMAT = '%d %b %Y %H:%M'


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def now_millis() -> int:
    return int(utc_now().timestamp() * 1000)


def format_timestamp(timestamp: int) -> str:
    """Render epoch milliseconds in UK local time."""
    utc_time = datetime.fromtimestamp(timestamp / 1000, tz=pytz.utc)

    return utc_time.astimezone(DISPLAY_TIMEZONE).strftime(TIMESTAMP_DISPLAY_FORMAT)
