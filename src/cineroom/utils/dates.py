"""Date and time helpers for the room scheduling grid."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from cineroom.config import settings

LOCAL_TZ = ZoneInfo(settings.timezone)


def as_local(moment: datetime) -> datetime:
    """
    Express a datetime on the cinema's wall clock.

    Naive datetimes are taken to already be local wall-clock values and get
    the local zone attached; aware ones are converted.

    Example:
        >>> as_local(datetime(2030, 1, 1, 14, 0)).hour
        14
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=LOCAL_TZ)
    return moment.astimezone(LOCAL_TZ)


def now_local() -> datetime:
    return datetime.now(tz=LOCAL_TZ)


def at_hour(day: date, hour: int) -> datetime:
    """Local datetime for `hour`:00 on `day`."""
    return datetime.combine(day, time(hour, 0), tzinfo=LOCAL_TZ)


def add_minutes(moment: datetime, minutes: int | float) -> datetime:
    return moment + timedelta(minutes=minutes)


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def floor_to_step(moment: datetime, step_minutes: int) -> datetime:
    """Round down to the previous `step_minutes` boundary, dropping seconds."""
    return moment.replace(minute=moment.minute - moment.minute % step_minutes, second=0, microsecond=0)


def ceil_to_step(moment: datetime, step_minutes: int) -> datetime:
    """Round up to the next `step_minutes` boundary (unchanged if already on one)."""
    floored = floor_to_step(moment, step_minutes)
    if floored == moment:
        return floored
    return floored + timedelta(minutes=step_minutes)
