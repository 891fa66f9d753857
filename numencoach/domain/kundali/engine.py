from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from numencoach.domain.kundali.dasha import VimshottariCalculator
from numencoach.domain.kundali.derived.yoga_calculator import YogaCalculator
from numencoach.domain.kundali.divisional.divisional_builder import DivisionalBuilder
from numencoach.domain.kundali.ephemeris import SimplifiedEphemeris
from numencoach.domain.kundali.schemas import KundaliBundle


@dataclass(frozen=True)
class BirthInput:
    """
    Immutable birth input used for kundali calculation.
    """
    birth_date: date
    birth_time: time
    latitude: float
    longitude: float
    timezone: str = "Asia/Kolkata"


class KundaliEngine:
    """
    Orchestrates kundali calculation.

    This class:
    - Accepts birth inputs
    - Delegates each step to its calculator
    - Returns a KundaliBundle
    """

    def __init__(
        self,
        ephemeris: Optional[SimplifiedEphemeris] = None,
        divisional_builder: Optional[DivisionalBuilder] = None,
        dasha_calculator: Optional[VimshottariCalculator] = None,
        yoga_calculator: Optional[YogaCalculator] = None,
    ):
        self.ephemeris = ephemeris or SimplifiedEphemeris()
        self.divisional_builder = divisional_builder or DivisionalBuilder()
        self.dasha_calculator = dasha_calculator or VimshottariCalculator()
        self.yoga_calculator = yoga_calculator or YogaCalculator()

    def generate(
        self,
        birth: BirthInput,
        on: Optional[date] = None,
    ) -> KundaliBundle:
        """
        Generate the chart and everything derived from it.

        Raises ChartUnavailableError when the chart cannot be computed.
        `on` is the reference date for the running dasha (default today).
        """

        # ─────────────────────────────────────────────
        # Step 1: Natal chart (D1)
        # ─────────────────────────────────────────────

        chart = self.ephemeris.compute(
            birth_date=birth.birth_date,
            birth_time=birth.birth_time,
            latitude=birth.latitude,
            longitude=birth.longitude,
            timezone=birth.timezone,
        )

        # ─────────────────────────────────────────────
        # Step 2: Divisional charts
        # ─────────────────────────────────────────────

        vargas = self.divisional_builder.build(chart)

        # ─────────────────────────────────────────────
        # Step 3: Vimshottari dasha from the Moon
        # ─────────────────────────────────────────────

        dasha = self.dasha_calculator.calculate(
            moon_longitude=chart.moon.longitude,
            birth_date=birth.birth_date,
            on=on,
        )

        # ─────────────────────────────────────────────
        # Step 4: Yogas
        # ─────────────────────────────────────────────

        yogas = self.yoga_calculator.calculate(chart)

        return KundaliBundle(
            chart=chart,
            vargas=vargas,
            dasha=dasha,
            yogas=tuple(yogas),
        )
