import re
from collections import Counter

# Pythagorean letter values
LETTER_VALUES = {
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8, "I": 9,
    "J": 1, "K": 2, "L": 3, "M": 4, "N": 5, "O": 6, "P": 7, "Q": 8, "R": 9,
    "S": 1, "T": 2, "U": 3, "V": 4, "W": 5, "X": 6, "Y": 7, "Z": 8,
}

VOWELS = frozenset("AEIOU")

_NON_LETTERS = re.compile(r"[^A-Z]")


def clean_name(name: str) -> str:
    """Upper-case the name and strip everything that is not A–Z."""
    return _NON_LETTERS.sub("", name.upper())


def name_number(
    name: str,
    vowels_only: bool = False,
    consonants_only: bool = False,
) -> int:
    """
    Sum of the Pythagorean values of the letters in `name`.

    The result is not reduced. A name without letters yields 0.
    """
    total = 0

    for letter in clean_name(name):
        is_vowel = letter in VOWELS

        if vowels_only and not is_vowel:
            continue
        if consonants_only and is_vowel:
            continue

        total += LETTER_VALUES[letter]

    return total


def hidden_passion_number(name: str) -> int:
    """
    Most frequent letter value (1–9) in the name.

    Ties go to the smallest value; a name without letters yields 1.
    """
    counts = Counter(LETTER_VALUES[letter] for letter in clean_name(name))

    hidden_passion = 1
    max_count = 0
    for digit in range(1, 10):
        if counts[digit] > max_count:
            max_count = counts[digit]
            hidden_passion = digit

    return hidden_passion
