from datetime import date
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ─────────────────────────────────────────────
# Birth Data
# ─────────────────────────────────────────────

class BirthDate(BaseModel):
    """
    A calendar birth date split into its numeric parts.
    """
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1, le=9999)

    @model_validator(mode="after")
    def _check_calendar_date(self) -> "BirthDate":
        # raises ValueError for e.g. 31 April or 29 February in a common year
        date(self.year, self.month, self.day)
        return self

    @classmethod
    def from_date(cls, value: date) -> "BirthDate":
        return cls(day=value.day, month=value.month, year=value.year)

    @classmethod
    def parse(cls, value: str) -> "BirthDate":
        """
        Parse an ISO `YYYY-MM-DD` string.
        """
        return cls.from_date(date.fromisoformat(value.strip()))

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)


# ─────────────────────────────────────────────
# Numerology Profile
# ─────────────────────────────────────────────

LoShuRow = Tuple[int, int, int]


class NumerologyProfile(BaseModel):
    """
    Numbers derived from a full name and a birth date.
    """
    model_config = ConfigDict(frozen=True)

    life_path_number: int
    expression_number: int
    soul_urge_number: int
    personality_number: int
    birthday_number: int
    maturity_number: int
    lo_shu_grid: Tuple[LoShuRow, LoShuRow, LoShuRow]
    pinnacles: Tuple[int, int, int, int]
    challenges: Tuple[int, int, int, int]


class PersonInput(BaseModel):
    """
    Everything the compatibility scorer needs about one person.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    birth_date: BirthDate
    profile: NumerologyProfile

    @classmethod
    def build(cls, name: str, birth_date: BirthDate) -> "PersonInput":
        from numencoach.domain.numerology.calculator import NumerologyCalculator

        profile = NumerologyCalculator().calculate(name, birth_date)
        return cls(name=name, birth_date=birth_date, profile=profile)


# ─────────────────────────────────────────────
# Compatibility
# ─────────────────────────────────────────────

class CompatibilityCategory(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    CHALLENGING = "Challenging"


class FactorScores(BaseModel):
    """
    Normalised per-factor similarity scores (bonuses included).
    """
    model_config = ConfigDict(frozen=True)

    life_path: float
    expression: float
    soul_urge: float
    personality: float
    birthday: float
    hidden_passion: float
    lo_shu: float
    pinnacle_bonus: float
    challenge_penalty: float


class CompatibilityBreakdown(BaseModel):
    """
    Human-readable line for each of the eight factors.
    """
    model_config = ConfigDict(frozen=True)

    life_path: str
    expression: str
    soul_urge: str
    personality: str
    birthday: str
    hidden_passion: str
    lo_shu: str
    pinnacles: str


class CompatibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    category: CompatibilityCategory
    summary: str
    breakdown: CompatibilityBreakdown
    factors: FactorScores


class CategoryScores(BaseModel):
    """
    Life-area scores, each clamped to 0–100.
    """
    model_config = ConfigDict(frozen=True)

    love: int
    marriage: int
    career: int
    family: int
    financial: int
    spiritual: int
    communication: int
    lifestyle: int


class DetailedAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    strengths: Tuple[str, ...]
    challenges: Tuple[str, ...]
    recommendations: Tuple[str, ...]
