import math
from typing import Dict

from numencoach.domain.kundali.errors import UnsupportedDivisionError
from numencoach.domain.kundali.schemas import NatalChart


class BaseDivisionalCalculator:
    """
    Base class for all divisional chart calculators.

    Each divisional chart (D9, D10, D12) splits every 30° sign into
    `divisor` equal parts and maps part `i` of sign `s` onto sign
    (s * divisor + i) mod 12.
    """

    chart_type: str
    divisor: int

    def calculate(
        self,
        chart: NatalChart
    ) -> Dict[str, int]:
        """
        Calculate planet → divisional sign index from a D1 chart.
        """
        return {
            name: self.varga_sign(planet.sign, planet.longitude)
            for name, planet in chart.planets.items()
        }

    # ─────────────────────────────────────────────
    # Shared helpers
    # ─────────────────────────────────────────────

    def varga_sign(
        self,
        sign: int,
        longitude: float,
    ) -> int:
        if not 1 <= self.divisor <= 60:
            raise UnsupportedDivisionError(f"Unsupported divisor: {self.divisor}")

        span = 30 / self.divisor
        part = min(math.floor((longitude % 30) / span), self.divisor - 1)

        return (sign * self.divisor + part) % 12
