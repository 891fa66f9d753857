import unittest
from datetime import date, datetime, time

from numencoach.domain.kundali.errors import ChartUnavailableError
from numencoach.domain.kundali.ephemeris import (
    J2000,
    NAKSHATRA_SPAN,
    SimplifiedEphemeris,
    nakshatra_for,
    parse_birth_moment,
)


class TestTimeHelpers(unittest.TestCase):
    def setUp(self):
        self.ephemeris = SimplifiedEphemeris()

    def test_julian_day_at_j2000(self):
        self.assertEqual(self.ephemeris.julian_day(datetime(2000, 1, 1, 12, 0)), J2000)

    def test_julian_day_fraction(self):
        jd = self.ephemeris.julian_day(datetime(2000, 1, 1, 18, 0))
        self.assertAlmostEqual(jd - J2000, 0.25)

    def test_to_utc_with_iana_zone(self):
        utc = self.ephemeris.to_utc(date(2000, 1, 1), time(17, 30), "Asia/Kolkata")
        self.assertEqual(utc, datetime(2000, 1, 1, 12, 0))

    def test_to_utc_with_offset(self):
        for tz in ("+05:30", "UTC+05:30", "+0530"):
            utc = self.ephemeris.to_utc(date(2000, 1, 1), time(17, 30), tz)
            self.assertEqual(utc, datetime(2000, 1, 1, 12, 0))

        utc = self.ephemeris.to_utc(date(2000, 1, 1), time(8, 0), "-04:00")
        self.assertEqual(utc, datetime(2000, 1, 1, 12, 0))

    def test_unknown_zone_falls_back_to_utc(self):
        with self.assertLogs("numencoach.domain.kundali.ephemeris", level="WARNING"):
            utc = self.ephemeris.to_utc(date(2000, 1, 1), time(12, 0), "Mars/Olympus")
        self.assertEqual(utc, datetime(2000, 1, 1, 12, 0))

    def test_ayanamsa_is_linear_in_centuries(self):
        self.assertAlmostEqual(self.ephemeris.ayanamsa(J2000), 23.85)
        self.assertAlmostEqual(self.ephemeris.ayanamsa(J2000 + 36525), 23.85 + 0.396)

    def test_unknown_planet(self):
        with self.assertRaises(ValueError):
            self.ephemeris.tropical_longitude("Pluto", J2000)


class TestNakshatra(unittest.TestCase):
    def test_first_and_last(self):
        self.assertEqual(nakshatra_for(0.0), ("Ashwini", 0, 1))
        self.assertEqual(nakshatra_for(359.99), ("Revati", 26, 4))

    def test_pada_quarters(self):
        self.assertEqual(nakshatra_for(NAKSHATRA_SPAN / 4 + 0.01)[2], 2)
        self.assertEqual(nakshatra_for(NAKSHATRA_SPAN * 0.99)[2], 4)

    def test_exact_nakshatra_boundaries(self):
        self.assertEqual(nakshatra_for(40.0), ("Rohini", 3, 1))

        for k in range(1, 9):
            longitude = 40.0 * k
            with self.subTest(longitude=longitude):
                _, index, pada = nakshatra_for(longitude)
                self.assertEqual(index, 3 * k)
                self.assertEqual(pada, 1)

    def test_exact_pada_boundaries(self):
        # 10° is three padas into Ashwini; 50° three padas into Rohini
        self.assertEqual(nakshatra_for(10.0), ("Ashwini", 0, 4))
        self.assertEqual(nakshatra_for(50.0), ("Rohini", 3, 4))
        self.assertEqual(nakshatra_for(NAKSHATRA_SPAN / 2)[2], 3)

    def test_wraps_longitude(self):
        self.assertEqual(nakshatra_for(360.5), nakshatra_for(0.5))


class TestNatalChart(unittest.TestCase):
    def setUp(self):
        self.ephemeris = SimplifiedEphemeris()
        # 2000-01-01 12:00 UTC, so T = 0
        self.chart = self.ephemeris.compute(
            birth_date=date(2000, 1, 1),
            birth_time=time(17, 30),
            latitude=28.61,
            longitude=77.21,
            timezone="Asia/Kolkata",
        )

    def test_chart_at_j2000(self):
        self.assertEqual(self.chart.julian_day, J2000)
        self.assertAlmostEqual(self.chart.ayanamsa, 23.85)

        sun = self.chart.planets["Sun"]
        self.assertAlmostEqual(sun.longitude, 280.46646 - 23.85)
        self.assertEqual(sun.sign, 8)
        self.assertEqual(sun.sign_name, "Sagittarius")

        moon = self.chart.moon
        self.assertEqual(moon.sign, 6)
        self.assertEqual(moon.nakshatra, "Swati")
        self.assertEqual(moon.pada, 3)

    def test_all_planets_present(self):
        self.assertEqual(
            set(self.chart.planets),
            {"Sun", "Moon", "Mercury", "Venus", "Mars", "Jupiter", "Saturn", "Rahu", "Ketu"},
        )

    def test_ketu_opposes_rahu(self):
        for day in (date(1950, 3, 1), date(1984, 7, 19), date(2000, 1, 1), date(2031, 11, 30)):
            chart = self.ephemeris.compute(day, time(6, 45), 19.07, 72.87, "Asia/Kolkata")
            rahu, ketu = chart.planets["Rahu"], chart.planets["Ketu"]

            self.assertEqual(ketu.longitude, (rahu.longitude + 180) % 360)
            self.assertEqual(ketu.sign, (rahu.sign + 6) % 12)
            self.assertTrue(rahu.retrograde and ketu.retrograde)

    def test_rahu_moves_backwards(self):
        jan = self.ephemeris.compute(date(2000, 1, 1), time(12, 0), 0.0, 0.0, "UTC")
        feb = self.ephemeris.compute(date(2000, 2, 1), time(12, 0), 0.0, 0.0, "UTC")

        # about 1.65° of regression in 31 days
        drift = (jan.planets["Rahu"].longitude - feb.planets["Rahu"].longitude) % 360
        self.assertGreater(drift, 1.5)
        self.assertLess(drift, 1.8)

    def test_positions_are_consistent(self):
        for planet in self.chart.planets.values():
            self.assertTrue(0 <= planet.longitude < 360)
            self.assertTrue(0 <= planet.degree < 30)
            self.assertEqual(planet.house, (planet.sign - self.chart.ascendant) % 12 + 1)

    def test_equal_houses(self):
        houses = self.chart.houses
        self.assertEqual(len(houses), 12)
        self.assertEqual(houses[0], self.chart.ascendant)
        for i in range(11):
            self.assertEqual(houses[i + 1], (houses[i] + 1) % 12)

    def test_deterministic(self):
        again = self.ephemeris.compute(date(2000, 1, 1), time(17, 30), 28.61, 77.21, "Asia/Kolkata")
        self.assertEqual(again, self.chart)

    def test_serialises_sign_names(self):
        data = self.chart.model_dump(mode="json")
        self.assertEqual(data["planets"]["Sun"]["sign_name"], "Sagittarius")
        self.assertIn("ascendant_sign", data)


class TestChartUnavailable(unittest.TestCase):
    def test_malformed_birth_moment(self):
        with self.assertRaises(ChartUnavailableError):
            parse_birth_moment("1990-13-45", "10:30")
        with self.assertRaises(ChartUnavailableError):
            parse_birth_moment("1990-05-15", "25:99")
        with self.assertRaises(ChartUnavailableError):
            parse_birth_moment("1990-05-15", None)

    def test_calculation_failure_is_wrapped(self):
        ephemeris = SimplifiedEphemeris()
        with self.assertRaises(ChartUnavailableError):
            ephemeris.compute(date(2000, 1, 1), time(12, 0), 0.0, "east", "UTC")


if __name__ == "__main__":
    unittest.main()
