"""
Simplified ephemeris.

Planetary longitudes come from truncated mean-motion polynomials in
Julian centuries since J2000. This is an approximation and NOT a real
ephemeris; downstream readings rely on these exact approximate values,
so do not swap in a more precise model here.
"""

import logging
import math
import re
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Dict, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from numencoach.domain.kundali.errors import ChartUnavailableError
from numencoach.domain.kundali.schemas import NatalChart, PlanetPosition

logger = logging.getLogger(__name__)


J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0

NAKSHATRAS = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni",
    "Uttara Phalguni", "Hasta", "Chitra", "Swati", "Vishakha",
    "Anuradha", "Jyeshtha", "Mula", "Purva Ashadha", "Uttara Ashadha",
    "Shravana", "Dhanishtha", "Shatabhisha", "Purva Bhadrapada",
    "Uttara Bhadrapada", "Revati",
)

# Each Nakshatra is 13 degrees 20 minutes
NAKSHATRA_SPAN = 360.0 / 27.0
PADA_SPAN = NAKSHATRA_SPAN / 4.0

# (c0, c1, c2): longitude = c0 + c1*T + c2*T^2, tropical degrees
MEAN_LONGITUDE_TERMS: Dict[str, Tuple[float, float, float]] = {
    "Sun": (280.46646, 36000.76983, 0.0003032),
    "Moon": (218.3165, 481267.8813, -0.0015786),
    "Mercury": (252.25084, 149472.67411, -0.00000536),
    "Venus": (181.97973, 58517.81539, 0.00000165),
    "Mars": (355.43299, 19140.30268, 0.00000261),
    "Jupiter": (34.35148, 3034.90567, -0.00008501),
    "Saturn": (50.07571, 1222.11494, 0.00000021),
    # Mean lunar node. Departs from the simplified model, which had no
    # Rahu term and left it at a fixed 0° (see DESIGN.md)
    "Rahu": (125.04452, -1934.136261, 0.0020708),
}

# Mean nodes always move backwards through the zodiac
RETROGRADE_BODIES = frozenset({"Rahu", "Ketu"})

_OFFSET_PATTERN = re.compile(r"^(?:UTC|GMT)?([+-])(\d{1,2}):?(\d{2})?$")


def parse_birth_moment(dob: str, tob: str) -> Tuple[date, time]:
    """
    Parse `YYYY-MM-DD` and `HH:MM[:SS]` strings.

    Raises ChartUnavailableError when either part is malformed.
    """
    try:
        return date.fromisoformat(dob.strip()), time.fromisoformat(tob.strip())
    except (AttributeError, TypeError, ValueError) as exc:
        raise ChartUnavailableError(
            f"Malformed birth date/time: {dob!r} {tob!r}"
        ) from exc


def nakshatra_for(longitude: float) -> Tuple[str, int, int]:
    """
    Nakshatra name, index (0–26) and pada (1–4) for a sidereal longitude.
    """
    normalized = longitude % 360
    index = min(math.floor(normalized / NAKSHATRA_SPAN), 26)

    remaining = max(normalized - index * NAKSHATRA_SPAN, 0.0)
    pada = min(math.floor(remaining / PADA_SPAN) + 1, 4)

    return NAKSHATRAS[index], index, pada


class SimplifiedEphemeris:
    """
    Approximate sidereal chart calculator.

    This class:
    - Converts birth inputs into planetary positions
    - Uses Lahiri-style linear ayanamsa
    - Returns a NatalChart with equal (whole-sign) houses
    """

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def compute(
        self,
        birth_date: date,
        birth_time: time,
        latitude: float,
        longitude: float,
        timezone: str,
    ) -> NatalChart:
        """
        Compute the natal chart.

        Any failure is reported as ChartUnavailableError.
        """
        try:
            birth_dt_utc = self.to_utc(birth_date, birth_time, timezone)
            julian_day = self.julian_day(birth_dt_utc)
            ayanamsa = self.ayanamsa(julian_day)

            sidereal_time = self.sidereal_time(julian_day)
            ascendant = self.ascendant_sign(sidereal_time, longitude, ayanamsa)

            planets = self._calculate_planets(julian_day, ayanamsa, ascendant)

            return NatalChart(
                ascendant=ascendant,
                houses=self.houses(ascendant),
                planets=planets,
                ayanamsa=ayanamsa,
                julian_day=julian_day,
                sidereal_time=sidereal_time,
            )
        except ChartUnavailableError:
            raise
        except (ArithmeticError, TypeError, ValueError) as exc:
            logger.warning(f"Ephemeris calculation failed: {exc}")
            raise ChartUnavailableError("Failed to compute natal chart") from exc

    # ─────────────────────────────────────────────
    # Time & Astronomy Helpers
    # ─────────────────────────────────────────────

    def to_utc(
        self,
        birth_date: date,
        birth_time: time,
        timezone: str,
    ) -> datetime:
        """
        Convert local birth date & time into a naive UTC datetime.

        Accepts IANA zone names ("Asia/Kolkata") and fixed offsets
        ("+05:30", "UTC-4"). Unknown names are treated as UTC.
        """
        local_dt = datetime.combine(birth_date, birth_time)
        tz = self._resolve_timezone(timezone)

        if tz is None:
            logger.warning(f"Timezone '{timezone}' not recognised. Defaulting to UTC.")
            return local_dt

        utc_dt = local_dt.replace(tzinfo=tz).astimezone(dt_timezone.utc)
        return utc_dt.replace(tzinfo=None)

    def julian_day(self, dt: datetime) -> float:
        """
        Julian Day via the Gregorian day-number algorithm plus time of day.
        """
        a = (14 - dt.month) // 12
        y = dt.year + 4800 - a
        m = dt.month + 12 * a - 3

        day_number = (
            dt.day
            + (153 * m + 2) // 5
            + 365 * y
            + y // 4
            - y // 100
            + y // 400
            - 32045
        )

        return (
            day_number
            + (dt.hour - 12) / 24
            + dt.minute / 1440
            + dt.second / 86400
        )

    def centuries_since_j2000(self, julian_day: float) -> float:
        return (julian_day - J2000) / DAYS_PER_CENTURY

    def tropical_longitude(self, planet: str, julian_day: float) -> float:
        """
        Truncated mean longitude of a planet, tropical degrees 0–360.
        """
        try:
            c0, c1, c2 = MEAN_LONGITUDE_TERMS[planet]
        except KeyError:
            raise ValueError(f"No longitude formula for planet: {planet}")

        t = self.centuries_since_j2000(julian_day)
        return (c0 + c1 * t + c2 * t * t) % 360

    def ayanamsa(self, julian_day: float) -> float:
        """
        Linear precession correction (tropical → sidereal).
        """
        t = self.centuries_since_j2000(julian_day)
        return 23.85 + 0.396 * t

    def sidereal_time(self, julian_day: float) -> float:
        return ((julian_day - J2000) * 1.00273790935 + 280.46061837) % 360

    def ascendant_sign(
        self,
        sidereal_time: float,
        longitude: float,
        ayanamsa: float,
    ) -> int:
        ascendant_longitude = (sidereal_time + longitude / 15) % 360
        return int(((ascendant_longitude - ayanamsa) % 360) // 30)

    def houses(self, ascendant: int) -> Tuple[int, ...]:
        """
        Equal houses: twelve consecutive signs from the ascendant.
        """
        return tuple((ascendant + i) % 12 for i in range(12))

    # ─────────────────────────────────────────────
    # Planets
    # ─────────────────────────────────────────────

    def _calculate_planets(
        self,
        julian_day: float,
        ayanamsa: float,
        ascendant: int,
    ) -> Dict[str, PlanetPosition]:
        planets: Dict[str, PlanetPosition] = {}

        for name in MEAN_LONGITUDE_TERMS:
            sidereal = (self.tropical_longitude(name, julian_day) - ayanamsa) % 360
            sign = min(int(sidereal // 30), 11)
            planets[name] = self._position(
                name, sidereal, sign, sidereal % 30, ascendant
            )

        # Ketu is the opposite node
        rahu = planets["Rahu"]
        planets["Ketu"] = self._position(
            "Ketu",
            (rahu.longitude + 180) % 360,
            (rahu.sign + 6) % 12,
            rahu.degree,
            ascendant,
        )

        return planets

    def _position(
        self,
        name: str,
        longitude: float,
        sign: int,
        degree: float,
        ascendant: int,
    ) -> PlanetPosition:
        nakshatra, nakshatra_index, pada = nakshatra_for(longitude)

        return PlanetPosition(
            name=name,
            longitude=longitude,
            sign=sign,
            degree=degree,
            nakshatra=nakshatra,
            nakshatra_index=nakshatra_index,
            pada=pada,
            retrograde=name in RETROGRADE_BODIES,
            house=(sign - ascendant) % 12 + 1,
        )

    def _resolve_timezone(self, name: str):
        name = (name or "").strip()
        if name.upper() in {"", "UTC", "GMT", "Z"}:
            return dt_timezone.utc

        match = _OFFSET_PATTERN.match(name.upper())
        if match:
            sign, hours, minutes = match.groups()
            delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
            if delta >= timedelta(hours=15):
                return None
            return dt_timezone(-delta if sign == "-" else delta)

        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            return None
