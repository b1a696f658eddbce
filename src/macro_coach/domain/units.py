"""Unit conversions and calendar helpers."""

import math
from datetime import date, datetime, time, tzinfo

from macro_coach.domain.errors import InvalidInputError

KG_PER_POUND = 0.453592
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12
SECONDS_PER_DAY = 86400


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up."""
    return math.floor(value + 0.5)


def pounds_to_kg(lbs: float) -> float:
    return lbs * KG_PER_POUND


def kg_to_pounds(kg: float) -> float:
    return kg / KG_PER_POUND


def feet_inches_to_cm(feet: float, inches: float) -> float:
    """Convert a height in feet and inches to centimeters."""
    return (feet * INCHES_PER_FOOT + inches) * CM_PER_INCH


def age_in_years(birth_date: date, reference_date: date) -> int:
    """Return completed years between birth_date and reference_date."""
    birth = _as_date(birth_date)
    reference = _as_date(reference_date)
    if reference < birth:
        raise InvalidInputError("Reference date precedes birth date")
    before_birthday = (reference.month, reference.day) < (birth.month, birth.day)
    return reference.year - birth.year - int(before_birthday)


def days_between(start: date, end: date) -> int:
    """Return whole days from start to end, negative when end is earlier.

    Datetimes are compared to the second and the result is rounded to the
    nearest day, so a few hours of drift do not change the count. A plain
    date paired with a datetime is treated as midnight in that datetime's
    timezone. Naive and aware datetimes cannot be mixed.
    """
    if isinstance(start, datetime) or isinstance(end, datetime):
        start_zone, end_zone = _zone_of(start), _zone_of(end)
        both_datetimes = isinstance(start, datetime) and isinstance(end, datetime)
        if both_datetimes and (start_zone is None) != (end_zone is None):
            raise InvalidInputError("Cannot mix naive and aware datetimes")
        zone = start_zone or end_zone
        delta = _as_datetime(end, zone) - _as_datetime(start, zone)
        return round_half_up(delta.total_seconds() / SECONDS_PER_DAY)
    return (end - start).days


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _zone_of(value: date) -> tzinfo | None:
    if isinstance(value, datetime):
        return value.tzinfo
    return None


def _as_datetime(value: date, zone: tzinfo | None) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=zone)
