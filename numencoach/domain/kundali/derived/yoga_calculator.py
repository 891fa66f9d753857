from typing import List, Optional

from numencoach.domain.kundali.schemas import NatalChart, Yoga


# Maximum separation (degrees) for conjunction-based yogas
BUDHADITYA_ORB = 10.0
CHANDRA_MANGAL_ORB = 15.0


def angular_distance(a: float, b: float) -> float:
    """
    Shortest arc between two longitudes, 0–180.
    """
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


class YogaCalculator:
    """
    Detects a small set of classical yogas in a natal chart.

    Current support:
    - Gaja Kesari Yoga (Jupiter and Venus in the same or adjacent sign)
    - Budhaditya Yoga (Sun-Mercury conjunction)
    - Chandra Mangal Yoga (Moon-Mars conjunction)
    """

    def calculate(self, chart: NatalChart) -> List[Yoga]:
        yogas: List[Yoga] = []

        for detector in (
            self._gaja_kesari,
            self._budhaditya,
            self._chandra_mangal,
        ):
            yoga = detector(chart)
            if yoga:
                yogas.append(yoga)

        return yogas

    # ─────────────────────────────────────────────
    # Gaja Kesari Yoga
    # ─────────────────────────────────────────────

    def _gaja_kesari(self, chart: NatalChart) -> Optional[Yoga]:
        jupiter = chart.planets.get("Jupiter")
        venus = chart.planets.get("Venus")

        if not jupiter or not venus:
            return None

        if abs(jupiter.sign - venus.sign) > 1:
            return None

        return Yoga(
            name="Gaja Kesari Yoga",
            description="Jupiter और Venus का शुभ योग - wealth और wisdom का combination",
            strength="medium",
            effects=("Financial prosperity", "Good education", "Respected position"),
        )

    # ─────────────────────────────────────────────
    # Budhaditya Yoga
    # ─────────────────────────────────────────────

    def _budhaditya(self, chart: NatalChart) -> Optional[Yoga]:
        sun = chart.planets.get("Sun")
        mercury = chart.planets.get("Mercury")

        if not sun or not mercury:
            return None

        if angular_distance(sun.longitude, mercury.longitude) > BUDHADITYA_ORB:
            return None

        return Yoga(
            name="Budhaditya Yoga",
            description="Sun-Mercury conjunction - intelligence और communication skills",
            strength="strong",
            effects=("Sharp intellect", "Good communication", "Leadership abilities"),
        )

    # ─────────────────────────────────────────────
    # Chandra Mangal Yoga
    # ─────────────────────────────────────────────

    def _chandra_mangal(self, chart: NatalChart) -> Optional[Yoga]:
        moon = chart.planets.get("Moon")
        mars = chart.planets.get("Mars")

        if not moon or not mars:
            return None

        if angular_distance(moon.longitude, mars.longitude) > CHANDRA_MANGAL_ORB:
            return None

        return Yoga(
            name="Chandra Mangal Yoga",
            description="Moon-Mars combination - emotional strength और courage",
            strength="medium",
            effects=("Emotional resilience", "Courage in adversity", "Property gains"),
        )
