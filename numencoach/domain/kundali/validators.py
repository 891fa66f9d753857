"""
Birth data validation.

Computation code assumes pre-validated inputs; callers run these checks
first and translate InvalidBirthDataError into their own error surface.
"""

import re
from datetime import date, time
from typing import Optional

from numencoach.domain.kundali.errors import InvalidBirthDataError


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def validate_date_format(date_str: str) -> str:
    """Validate ISO date format (YYYY-MM-DD) and that the date exists."""
    if not isinstance(date_str, str) or not DATE_PATTERN.match(date_str):
        raise InvalidBirthDataError("Invalid date format. Use YYYY-MM-DD")
    try:
        date.fromisoformat(date_str)
    except ValueError:
        raise InvalidBirthDataError(f"Not a calendar date: {date_str}")
    return date_str


def validate_time_format(time_str: str) -> str:
    """Validate time format (HH:MM)."""
    if not isinstance(time_str, str) or not TIME_PATTERN.match(time_str):
        raise InvalidBirthDataError("Invalid time format. Use HH:MM")
    try:
        time.fromisoformat(time_str)
    except ValueError:
        raise InvalidBirthDataError(f"Not a clock time: {time_str}")
    return time_str


def validate_latitude(lat: float) -> float:
    """Validate latitude range."""
    if isinstance(lat, bool) or not isinstance(lat, (int, float)) or lat < -90 or lat > 90:
        raise InvalidBirthDataError("Latitude must be between -90 and 90")
    return float(lat)


def validate_longitude(lon: float) -> float:
    """Validate longitude range."""
    if isinstance(lon, bool) or not isinstance(lon, (int, float)) or lon < -180 or lon > 180:
        raise InvalidBirthDataError("Longitude must be between -180 and 180")
    return float(lon)


def validate_birth_data(
    latitude: float,
    longitude: float,
    dob: str,
    tob: Optional[str] = None,
) -> None:
    """
    Validate a full set of birth details.

    Time of birth is optional; when given it must be HH:MM.
    """
    validate_latitude(latitude)
    validate_longitude(longitude)
    validate_date_format(dob)

    if tob:
        validate_time_format(tob)
