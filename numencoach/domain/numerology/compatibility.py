"""
Numerology compatibility scoring.

Combines two people's numerology into a weighted 0–100 score built
from eight factors, plus life-area scores and a rule-based analysis.
"""

import math
from typing import List, Tuple

from numencoach.domain.numerology.calculator import NumerologyCalculator
from numencoach.domain.numerology.letters import hidden_passion_number
from numencoach.domain.numerology.schemas import (
    CategoryScores,
    CompatibilityBreakdown,
    CompatibilityCategory,
    CompatibilityResult,
    DetailedAnalysis,
    FactorScores,
    NumerologyProfile,
    PersonInput,
)


# ─────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────

WEIGHTS = {
    "life_path": 0.25,
    "expression": 0.15,
    "soul_urge": 0.15,
    "personality": 0.15,
    "birthday": 0.10,
    "hidden_passion": 0.10,
    "lo_shu": 0.05,
}

EQUALITY_BONUS = 0.1
LO_SHU_COMPLETION_BONUS = 0.05
PINNACLE_MATCH_BONUS = 0.025
CHALLENGE_MATCH_PENALTY = 0.0125

# Lower bounds, checked in order
CATEGORY_THRESHOLDS: List[Tuple[int, CompatibilityCategory]] = [
    (80, CompatibilityCategory.EXCELLENT),
    (65, CompatibilityCategory.GOOD),
    (50, CompatibilityCategory.AVERAGE),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward."""
    return int(math.floor(value + 0.5))


def similarity(a: int, b: int) -> float:
    """1 − |a − b| / 8."""
    return 1 - abs(a - b) / 8


def categorize(score: int) -> CompatibilityCategory:
    for threshold, category in CATEGORY_THRESHOLDS:
        if score >= threshold:
            return category
    return CompatibilityCategory.CHALLENGING


def life_path_score(life_path1: int, life_path2: int) -> int:
    """
    Single-factor percentage based on life path numbers only.
    """
    return round_half_up(similarity(life_path1, life_path2) * 100)


class CompatibilityScorer:
    """
    Scores the numerology compatibility of two people.

    The score is symmetric: swapping the two people only changes the
    order in which names appear in the breakdown text.
    """

    def __init__(self, calculator: NumerologyCalculator | None = None):
        self.calculator = calculator or NumerologyCalculator()

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def score(
        self,
        person1: PersonInput,
        person2: PersonInput,
    ) -> CompatibilityResult:
        p1, p2 = person1.profile, person2.profile

        life_path = self._with_bonus(p1.life_path_number, p2.life_path_number)
        expression = self._with_bonus(p1.expression_number, p2.expression_number)
        soul_urge = self._with_bonus(p1.soul_urge_number, p2.soul_urge_number)
        personality = self._with_bonus(p1.personality_number, p2.personality_number)
        birthday = similarity(p1.birthday_number, p2.birthday_number)

        hidden1 = hidden_passion_number(person1.name)
        hidden2 = hidden_passion_number(person2.name)
        hidden_passion = 1.0 if hidden1 == hidden2 else similarity(hidden1, hidden2)

        lo_shu, matching_digits = self._lo_shu_score(person1, person2)
        pinnacle_bonus, challenge_penalty = self._synergy(p1, p2)

        raw = (
            WEIGHTS["life_path"] * life_path
            + WEIGHTS["expression"] * expression
            + WEIGHTS["soul_urge"] * soul_urge
            + WEIGHTS["personality"] * personality
            + WEIGHTS["birthday"] * birthday
            + WEIGHTS["hidden_passion"] * hidden_passion
            + WEIGHTS["lo_shu"] * lo_shu
            + pinnacle_bonus
            - challenge_penalty
        )
        score = round_half_up(max(0.0, min(1.0, raw)) * 100)

        factors = FactorScores(
            life_path=life_path,
            expression=expression,
            soul_urge=soul_urge,
            personality=personality,
            birthday=birthday,
            hidden_passion=hidden_passion,
            lo_shu=lo_shu,
            pinnacle_bonus=pinnacle_bonus,
            challenge_penalty=challenge_penalty,
        )

        return CompatibilityResult(
            score=score,
            category=categorize(score),
            summary=self._summary(score, factors),
            breakdown=self._breakdown(
                p1, p2, factors, hidden1, hidden2, matching_digits
            ),
            factors=factors,
        )

    def category_scores(
        self,
        person1: NumerologyProfile,
        person2: NumerologyProfile,
    ) -> CategoryScores:
        """
        Life-area scores derived from pairwise number similarity.
        """
        base = similarity(person1.life_path_number, person2.life_path_number)
        soul = similarity(person1.soul_urge_number, person2.soul_urge_number)
        expression = similarity(person1.expression_number, person2.expression_number)
        personality = similarity(person1.personality_number, person2.personality_number)
        birthday = similarity(person1.birthday_number, person2.birthday_number)

        def pct(value: float) -> int:
            # master numbers can push similarity below 0
            return max(0, min(100, round_half_up(value * 100)))

        return CategoryScores(
            love=pct((base + soul) / 2),
            marriage=pct((base + expression) / 2),
            career=pct(expression),
            family=pct(personality),
            financial=pct(base + 0.1),
            spiritual=pct(soul),
            communication=pct(personality),
            lifestyle=pct(birthday),
        )

    def detailed_analysis(self, scores: CategoryScores) -> DetailedAnalysis:
        """
        Rule-based strengths, challenges and recommendations.
        """
        strengths: List[str] = []
        challenges: List[str] = []
        recommendations: List[str] = [
            "Maintain regular communication and mutual respect",
            "Set shared goals and work on them together",
        ]

        if scores.love > 80:
            strengths.append("Deep emotional connection and mutual understanding")
        if scores.marriage > 75:
            strengths.append("Strong foundation for long-term commitment")
        if scores.communication > 70:
            strengths.append("Excellent communication and shared interests")

        if scores.career < 60:
            challenges.append("Different career priorities, compromise is needed")
        if scores.financial < 65:
            challenges.append("Different views on money management, plan together")
        if scores.lifestyle < 70:
            challenges.append("Different lifestyle preferences, find a balance")

        if scores.spiritual > 75:
            recommendations.append("Share spiritual practices such as meditation or prayer")

        return DetailedAnalysis(
            strengths=tuple(strengths) or (
                "Unique compatibility pattern, conscious effort builds a strong bond",
            ),
            challenges=tuple(challenges) or (
                "Minor adjustments needed for perfect harmony",
            ),
            recommendations=tuple(recommendations),
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _with_bonus(self, a: int, b: int) -> float:
        return similarity(a, b) + (EQUALITY_BONUS if a == b else 0.0)

    def _lo_shu_score(
        self,
        person1: PersonInput,
        person2: PersonInput,
    ) -> Tuple[float, int]:
        d1, d2 = person1.birth_date, person2.birth_date
        digits1 = self.calculator.lo_shu_digits(d1.day, d1.month, d1.year)
        digits2 = self.calculator.lo_shu_digits(d2.day, d2.month, d2.year)

        matching = len(digits1 & digits2)
        completes = bool(digits1 - digits2) and bool(digits2 - digits1)

        score = matching / 9 + (LO_SHU_COMPLETION_BONUS if completes else 0.0)
        return score, matching

    def _synergy(
        self,
        p1: NumerologyProfile,
        p2: NumerologyProfile,
    ) -> Tuple[float, float]:
        pinnacle_matches = sum(
            1 for a, b in zip(p1.pinnacles, p2.pinnacles) if a == b
        )
        challenge_matches = sum(
            1 for a, b in zip(p1.challenges, p2.challenges) if a == b
        )
        return (
            pinnacle_matches * PINNACLE_MATCH_BONUS,
            challenge_matches * CHALLENGE_MATCH_PENALTY,
        )

    def _summary(self, score: int, factors: FactorScores) -> str:
        if factors.life_path > 0.8:
            focus = "life path"
        elif factors.soul_urge > 0.8:
            focus = "emotional"
        else:
            focus = "personality"
        return f"{score}% compatibility with strong {focus} alignment"

    def _breakdown(
        self,
        p1: NumerologyProfile,
        p2: NumerologyProfile,
        f: FactorScores,
        hidden1: int,
        hidden2: int,
        matching_digits: int,
    ) -> CompatibilityBreakdown:
        def pct(value: float) -> int:
            return round_half_up(value * 100)

        if p1.life_path_number == p2.life_path_number:
            life_path_note = "Perfect match!"
        elif f.life_path > 0.7:
            life_path_note = "Strong compatibility"
        else:
            life_path_note = "Need understanding"

        if f.soul_urge > 0.8:
            soul_note = "Deep connection"
        elif f.soul_urge > 0.6:
            soul_note = "Good understanding"
        else:
            soul_note = "Work on emotional sync"

        return CompatibilityBreakdown(
            life_path=f"Life Path harmony {pct(f.life_path)}% - {life_path_note}",
            expression=(
                f"Career/Goals {pct(f.expression)}% - "
                + ("Shared ambitions" if f.expression > 0.7 else "Different approaches to success")
            ),
            soul_urge=f"Emotional bond {pct(f.soul_urge)}% - {soul_note}",
            personality=(
                f"Social image {pct(f.personality)}% - "
                + ("Great public chemistry" if f.personality > 0.7 else "Different social styles")
            ),
            birthday=(
                f"Daily habits {pct(f.birthday)}% - "
                + ("Easy daily flow" if f.birthday > 0.7 else "Adjust routines")
            ),
            hidden_passion=(
                f"Inner drives {pct(f.hidden_passion)}% - "
                f"Hidden passion {hidden1} & {hidden2}"
            ),
            lo_shu=(
                f"Energy balance {pct(f.lo_shu)}% - "
                + ("Strong energy match" if matching_digits > 5 else "Complementary energies")
            ),
            pinnacles=(
                "Future growth "
                + ("Aligned path" if f.pinnacle_bonus > 0.05 else "Different timings")
                + " - "
                + ("Shared struggles need care" if f.challenge_penalty > 0.025 else "Individual growth")
            ),
        )
