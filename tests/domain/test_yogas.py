import unittest

from numencoach.domain.kundali.derived.yoga_calculator import (
    YogaCalculator,
    angular_distance,
)
from numencoach.domain.kundali.ephemeris import nakshatra_for
from numencoach.domain.kundali.schemas import NatalChart, PlanetPosition


def planet(name: str, longitude: float) -> PlanetPosition:
    nakshatra, idx, pada = nakshatra_for(longitude)
    return PlanetPosition(
        name=name,
        longitude=longitude,
        sign=int(longitude // 30),
        degree=longitude % 30,
        nakshatra=nakshatra,
        nakshatra_index=idx,
        pada=pada,
        house=int(longitude // 30) + 1,
    )


def chart(**longitudes: float) -> NatalChart:
    defaults = {
        "Sun": 10.0,
        "Moon": 100.0,
        "Mars": 200.0,
        "Mercury": 60.0,
        "Jupiter": 250.0,
        "Venus": 20.0,
        "Saturn": 300.0,
    }
    defaults.update(longitudes)
    return NatalChart(
        ascendant=0,
        houses=tuple(range(12)),
        planets={name: planet(name, lon) for name, lon in defaults.items()},
        ayanamsa=23.85,
        julian_day=2451545.0,
        sidereal_time=0.0,
    )


def names(natal: NatalChart):
    return [y.name for y in YogaCalculator().calculate(natal)]


class TestAngularDistance(unittest.TestCase):
    def test_wraps_around_zero(self):
        self.assertAlmostEqual(angular_distance(355.0, 3.0), 8.0)
        self.assertAlmostEqual(angular_distance(3.0, 355.0), 8.0)

    def test_never_exceeds_half_circle(self):
        self.assertAlmostEqual(angular_distance(0.0, 180.0), 180.0)
        self.assertAlmostEqual(angular_distance(10.0, 200.0), 170.0)


class TestYogaCalculator(unittest.TestCase):
    def test_balanced_chart_has_no_yogas(self):
        self.assertEqual(names(chart()), [])

    def test_gaja_kesari_same_or_adjacent_sign(self):
        self.assertIn("Gaja Kesari Yoga", names(chart(Jupiter=15.0, Venus=20.0)))
        self.assertIn("Gaja Kesari Yoga", names(chart(Jupiter=45.0, Venus=20.0)))
        self.assertNotIn("Gaja Kesari Yoga", names(chart(Jupiter=75.0, Venus=20.0)))

    def test_gaja_kesari_compares_sign_indices_only(self):
        # Pisces and Aries are eleven signs apart by index
        self.assertNotIn("Gaja Kesari Yoga", names(chart(Jupiter=355.0, Venus=5.0)))

    def test_budhaditya_across_zero(self):
        self.assertIn("Budhaditya Yoga", names(chart(Sun=355.0, Mercury=3.0)))
        self.assertNotIn("Budhaditya Yoga", names(chart(Sun=355.0, Mercury=10.0)))

    def test_chandra_mangal_orb_is_inclusive(self):
        self.assertIn("Chandra Mangal Yoga", names(chart(Moon=100.0, Mars=115.0)))
        self.assertNotIn("Chandra Mangal Yoga", names(chart(Moon=100.0, Mars=116.0)))

    def test_yoga_details(self):
        yogas = YogaCalculator().calculate(chart(Sun=100.0, Mercury=105.0))

        self.assertEqual(len(yogas), 1)
        self.assertEqual(yogas[0].strength, "strong")
        self.assertEqual(yogas[0].effects[0], "Sharp intellect")

    def test_missing_planet_is_ignored(self):
        natal = chart(Moon=100.0, Mars=110.0)
        planets = {k: v for k, v in natal.planets.items() if k != "Mars"}
        natal = natal.model_copy(update={"planets": planets})

        self.assertNotIn("Chandra Mangal Yoga", names(natal))


if __name__ == "__main__":
    unittest.main()
