from typing import Dict, List, Set, Tuple

from numencoach.domain.numerology.letters import name_number
from numencoach.domain.numerology.reduction import digits_of, reduce_number
from numencoach.domain.numerology.schemas import BirthDate, NumerologyProfile


# Traditional Lo Shu square, rows top to bottom
LO_SHU_LAYOUT: Tuple[Tuple[int, int, int], ...] = (
    (4, 9, 2),
    (3, 5, 7),
    (8, 1, 6),
)

NUMBER_MEANINGS: Dict[int, Dict[str, str]] = {
    1: {"keyword": "Leader", "trait": "independent and pioneering"},
    2: {"keyword": "Peacemaker", "trait": "cooperative and sensitive"},
    3: {"keyword": "Communicator", "trait": "creative and expressive"},
    4: {"keyword": "Builder", "trait": "practical and disciplined"},
    5: {"keyword": "Adventurer", "trait": "curious and freedom-loving"},
    6: {"keyword": "Nurturer", "trait": "responsible and caring"},
    7: {"keyword": "Seeker", "trait": "analytical and spiritual"},
    8: {"keyword": "Achiever", "trait": "ambitious and authoritative"},
    9: {"keyword": "Humanitarian", "trait": "compassionate and generous"},
    11: {"keyword": "Visionary", "trait": "intuitive and inspiring"},
    22: {"keyword": "Master Builder", "trait": "visionary and highly practical"},
    33: {"keyword": "Master Teacher", "trait": "selfless and uplifting"},
}


def number_meaning(number: int) -> Dict[str, str]:
    """
    Keyword and trait phrase for a numerology number.
    """
    return NUMBER_MEANINGS.get(
        number,
        {"keyword": "Unknown", "trait": "beyond the classic number range"},
    )


class NumerologyCalculator:
    """
    Derives numerology numbers from a full name and birth date.

    Every method is pure; inputs are assumed to be validated
    (BirthDate guarantees a real calendar date).
    """

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calculate(
        self,
        full_name: str,
        birth_date: BirthDate,
    ) -> NumerologyProfile:
        """
        Build the complete numerology profile.
        """
        day, month, year = birth_date.day, birth_date.month, birth_date.year

        life_path = self.life_path_number(day, month, year)
        expression = self.expression_number(full_name)

        return NumerologyProfile(
            life_path_number=life_path,
            expression_number=expression,
            soul_urge_number=self.soul_urge_number(full_name),
            personality_number=self.personality_number(full_name),
            birthday_number=self.birthday_number(day),
            maturity_number=self.maturity_number(life_path, expression),
            lo_shu_grid=self.lo_shu_grid(day, month, year),
            pinnacles=self.pinnacles(day, month, year),
            challenges=self.challenges(day, month, year),
        )

    # ─────────────────────────────────────────────
    # Core numbers
    # ─────────────────────────────────────────────

    def life_path_number(self, day: int, month: int, year: int) -> int:
        total = reduce_number(day) + reduce_number(month) + reduce_number(year)
        return reduce_number(total)

    def expression_number(self, full_name: str) -> int:
        """
        Each name part is reduced on its own before the parts are summed.
        """
        total = sum(
            reduce_number(name_number(part))
            for part in full_name.split()
        )
        return reduce_number(total)

    def soul_urge_number(self, full_name: str) -> int:
        return reduce_number(name_number(full_name, vowels_only=True))

    def personality_number(self, full_name: str) -> int:
        return reduce_number(name_number(full_name, consonants_only=True))

    def birthday_number(self, day: int) -> int:
        return reduce_number(day)

    def maturity_number(self, life_path: int, expression: int) -> int:
        return reduce_number(life_path + expression, keep_master=False)

    # ─────────────────────────────────────────────
    # Lo Shu grid
    # ─────────────────────────────────────────────

    def lo_shu_pool(self, day: int, month: int, year: int) -> List[int]:
        """
        Birth date digits plus the birthday (driver) and life path (conductor).
        """
        pool = digits_of(day) + digits_of(month) + digits_of(year)
        pool.append(self.birthday_number(day))
        pool.append(self.life_path_number(day, month, year))
        return pool

    def lo_shu_digits(self, day: int, month: int, year: int) -> Set[int]:
        """
        Distinct digits 1–9 present in the Lo Shu pool.

        Master-number driver/conductor values fall outside 1–9 and are ignored.
        """
        return {d for d in self.lo_shu_pool(day, month, year) if 1 <= d <= 9}

    def lo_shu_grid(
        self,
        day: int,
        month: int,
        year: int,
    ) -> Tuple[Tuple[int, int, int], ...]:
        present = self.lo_shu_digits(day, month, year)

        return tuple(
            tuple(number if number in present else 0 for number in row)
            for row in LO_SHU_LAYOUT
        )

    # ─────────────────────────────────────────────
    # Pinnacles & Challenges
    # ─────────────────────────────────────────────

    def pinnacles(self, day: int, month: int, year: int) -> Tuple[int, int, int, int]:
        r_day, r_month, r_year = (
            reduce_number(day), reduce_number(month), reduce_number(year)
        )

        first = reduce_number(r_month + r_day)
        second = reduce_number(r_day + r_year)
        third = reduce_number(first + second)
        fourth = reduce_number(r_month + r_year)

        return first, second, third, fourth

    def challenges(self, day: int, month: int, year: int) -> Tuple[int, int, int, int]:
        r_day = reduce_number(day, keep_master=False)
        r_month = reduce_number(month, keep_master=False)
        r_year = reduce_number(year, keep_master=False)

        first = reduce_number(abs(r_month - r_day), keep_master=False)
        second = reduce_number(abs(r_day - r_year), keep_master=False)
        third = reduce_number(abs(first - second), keep_master=False)
        fourth = reduce_number(abs(r_month - r_year), keep_master=False)

        return first, second, third, fourth
