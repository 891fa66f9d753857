from datetime import date, timedelta
from typing import Iterator, List, Optional, Tuple

from numencoach.domain.kundali.ephemeris import NAKSHATRA_SPAN, nakshatra_for
from numencoach.domain.kundali.errors import ChartUnavailableError
from numencoach.domain.kundali.schemas import (
    CurrentDasha,
    DashaInterval,
    DashaPeriod,
    VimshottariDasha,
)


# Order of Dasha Lords and their duration in years
DASHA_SEQUENCE: Tuple[DashaPeriod, ...] = (
    DashaPeriod(planet="Ketu", years=7),
    DashaPeriod(planet="Venus", years=20),
    DashaPeriod(planet="Sun", years=6),
    DashaPeriod(planet="Moon", years=10),
    DashaPeriod(planet="Mars", years=7),
    DashaPeriod(planet="Rahu", years=18),
    DashaPeriod(planet="Jupiter", years=16),
    DashaPeriod(planet="Saturn", years=19),
    DashaPeriod(planet="Mercury", years=17),
)

CYCLE_YEARS = sum(p.years for p in DASHA_SEQUENCE)  # 120

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44


def _shift(anchor: date, years: float) -> date:
    # date + timedelta keeps whole days only; every boundary of one
    # timeline must be shifted from the same anchor
    return anchor + timedelta(days=years * DAYS_PER_YEAR)


class VimshottariCalculator:
    """
    Vimshottari Dasha periods anchored on the birth date.

    The Moon's nakshatra picks the first lord (index mod 9); the part of
    that nakshatra the Moon has not yet crossed is the balance of the
    first maha period still to run at birth.
    """

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calculate(
        self,
        moon_longitude: float,
        birth_date: date,
        on: Optional[date] = None,
    ) -> VimshottariDasha:
        start_idx, balance_years = self.starting_point(moon_longitude)

        periods = [
            interval
            for interval, _ in self._maha_periods(start_idx, balance_years, birth_date, cycles=1)
        ]

        return VimshottariDasha(
            sequence=DASHA_SEQUENCE,
            starting_planet=DASHA_SEQUENCE[start_idx].planet,
            balance_years=round(balance_years, 4),
            periods=tuple(periods),
            current=self.current(
                moon_longitude, birth_date, on or date.today()
            ),
        )

    def starting_point(self, moon_longitude: float) -> Tuple[int, float]:
        """
        Index of the first dasha lord and the balance (years) left at birth.
        """
        _, nakshatra_idx, _ = nakshatra_for(moon_longitude)

        traversed = (moon_longitude % 360) - nakshatra_idx * NAKSHATRA_SPAN
        fraction_remaining = min(max(1.0 - traversed / NAKSHATRA_SPAN, 0.0), 1.0)

        start_idx = nakshatra_idx % 9
        return start_idx, DASHA_SEQUENCE[start_idx].years * fraction_remaining

    def current(
        self,
        moon_longitude: float,
        birth_date: date,
        on: date,
    ) -> Optional[CurrentDasha]:
        """
        Maha and sub period running on `on`; None before birth.

        Periods repeat every 120 years, so any later date resolves.
        """
        if on < birth_date:
            return None

        start_idx, balance_years = self.starting_point(moon_longitude)

        for maha, full_start_years in self._maha_periods(start_idx, balance_years, birth_date):
            if not maha.contains(on):
                continue

            subs = self._sub_periods(
                maha.planet, birth_date, full_start_years, maha.end_date
            )
            sub = next((s for s in subs if s.contains(on)), None)
            if sub is None:
                raise ChartUnavailableError(
                    f"No {maha.planet} sub period covers {on.isoformat()}"
                )

            return CurrentDasha(
                maha=maha,
                sub=sub,
                remaining_years=round((maha.end_date - on).days / DAYS_PER_YEAR, 2),
                remaining_months=round((sub.end_date - on).days / DAYS_PER_MONTH, 2),
            )

        return None  # pragma: no cover

    def antardashas(
        self,
        maha_planet: str,
        maha_start: date,
        maha_end: Optional[date] = None,
    ) -> List[DashaInterval]:
        """
        Sub periods of a maha period, starting with the maha lord itself.

        Each lasts maha_years * sub_years / 120 years. With `maha_end`
        the last one closes exactly on it.
        """
        return self._sub_periods(maha_planet, maha_start, 0.0, maha_end)

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _sub_periods(
        self,
        maha_planet: str,
        anchor: date,
        start_years: float,
        maha_end: Optional[date],
    ) -> List[DashaInterval]:
        start_idx = next(
            (i for i, p in enumerate(DASHA_SEQUENCE) if p.planet == maha_planet),
            None,
        )
        if start_idx is None:
            raise ValueError(f"Not a dasha lord: {maha_planet}")

        maha_years = DASHA_SEQUENCE[start_idx].years

        sub_periods: List[DashaInterval] = []
        elapsed = start_years

        for i in range(9):
            sub = DASHA_SEQUENCE[(start_idx + i) % 9]
            start = _shift(anchor, elapsed)
            elapsed += maha_years * sub.years / CYCLE_YEARS

            end = maha_end if i == 8 and maha_end is not None else _shift(anchor, elapsed)
            sub_periods.append(DashaInterval(planet=sub.planet, start_date=start, end_date=end))

        return sub_periods

    def _maha_periods(
        self,
        start_idx: int,
        balance_years: float,
        birth_date: date,
        cycles: Optional[int] = None,
    ) -> Iterator[Tuple[DashaInterval, float]]:
        """
        Yield (maha interval, years from birth to its theoretical full start).

        The first period is the balance; its full start lies before birth,
        so the offset is negative. With `cycles`, stops after that many
        full rounds of nine lords beyond the balance period; otherwise
        yields indefinitely.
        """
        first = DASHA_SEQUENCE[start_idx]

        yield (
            DashaInterval(
                planet=first.planet,
                start_date=birth_date,
                end_date=_shift(birth_date, balance_years),
            ),
            balance_years - first.years,
        )

        offset = balance_years
        i = 1
        while cycles is None or i <= 9 * cycles:
            period = DASHA_SEQUENCE[(start_idx + i) % 9]
            start_years = offset
            offset += period.years

            yield (
                DashaInterval(
                    planet=period.planet,
                    start_date=_shift(birth_date, start_years),
                    end_date=_shift(birth_date, offset),
                ),
                start_years,
            )
            i += 1
