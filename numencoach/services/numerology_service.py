from datetime import date
from typing import Any, Dict, Optional, Union

from numencoach.domain.numerology.calculator import NumerologyCalculator
from numencoach.domain.numerology.schemas import BirthDate
from numencoach.services.insight_service import InsightService
from numencoach.services.interpretation_service import InterpretationService


BirthDateLike = Union[str, date, BirthDate]


def coerce_birth_date(value: BirthDateLike) -> BirthDate:
    """
    Accept "YYYY-MM-DD", a date, or a BirthDate.

    Raises ValueError (pydantic.ValidationError included) for
    malformed or non-existent dates.
    """
    if isinstance(value, BirthDate):
        return value
    if isinstance(value, date):
        return BirthDate.from_date(value)
    return BirthDate.parse(value)


class NumerologyService:
    """
    Personal numerology: profile, template reading, AI insight.
    """

    def __init__(
        self,
        insights: InsightService,
        calculator: Optional[NumerologyCalculator] = None,
        interpreter: Optional[InterpretationService] = None,
    ):
        self.insights = insights
        self.calculator = calculator or NumerologyCalculator()
        self.interpreter = interpreter or InterpretationService()

    async def calculate(
        self,
        name: str,
        birth_date: BirthDateLike,
        *,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        name = name.strip()
        if not name:
            raise ValueError("Name is required")

        birth = coerce_birth_date(birth_date)
        profile = self.calculator.calculate(name, birth)
        reading = self.interpreter.numerology_reading(name, profile)

        insight = await self.insights.numerology_insight(
            name, profile, user_id=user_id
        )

        return {
            "name": name,
            "birth_date": birth.as_date().isoformat(),
            "profile": profile.model_dump(mode="json"),
            "reading": reading.model_dump(mode="json"),
            "insight": insight,
        }
