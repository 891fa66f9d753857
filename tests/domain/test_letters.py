import unittest

from numencoach.domain.numerology.letters import (
    clean_name,
    hidden_passion_number,
    name_number,
)


class TestNameNumber(unittest.TestCase):
    def test_pythagorean_values(self):
        self.assertEqual(name_number("A"), 1)
        self.assertEqual(name_number("I"), 9)
        self.assertEqual(name_number("J"), 1)
        self.assertEqual(name_number("Z"), 8)

    def test_full_name(self):
        self.assertEqual(name_number("John"), 20)
        self.assertEqual(name_number("Smith"), 24)
        self.assertEqual(name_number("John Smith"), 44)

    def test_case_and_non_letters_ignored(self):
        self.assertEqual(name_number("j.o-h n!"), name_number("JOHN"))
        self.assertEqual(clean_name("O'Brien 3rd"), "OBRIENRD")

    def test_vowels_and_consonants(self):
        self.assertEqual(name_number("John Smith", vowels_only=True), 15)
        self.assertEqual(name_number("John Smith", consonants_only=True), 29)

    def test_empty_input_yields_zero(self):
        self.assertEqual(name_number(""), 0)
        self.assertEqual(name_number("123 -- !!"), 0)
        self.assertEqual(name_number("Rhythm", vowels_only=True), 0)


class TestHiddenPassion(unittest.TestCase):
    def test_most_frequent_value(self):
        # A, J, S all map to 1
        self.assertEqual(hidden_passion_number("Ajas"), 1)
        self.assertEqual(hidden_passion_number("Eeee"), 5)

    def test_tie_goes_to_smallest_digit(self):
        # John Smith: 1 (J, S) and 8 (H, H) both appear twice
        self.assertEqual(hidden_passion_number("John Smith"), 1)

    def test_no_letters(self):
        self.assertEqual(hidden_passion_number(""), 1)


if __name__ == "__main__":
    unittest.main()
