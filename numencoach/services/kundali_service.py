import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict

from numencoach.domain.kundali.engine import BirthInput, KundaliEngine
from numencoach.domain.kundali.errors import ChartUnavailableError
from numencoach.domain.kundali.ephemeris import parse_birth_moment
from numencoach.domain.kundali.schemas import KundaliBundle
from numencoach.domain.kundali.validators import validate_birth_data
from numencoach.domain.numerology.calculator import NumerologyCalculator
from numencoach.domain.numerology.schemas import BirthDate
from numencoach.services.insight_service import InsightService
from numencoach.services.interpretation_service import (
    InterpretationContext,
    InterpretationService,
)

logger = logging.getLogger(__name__)


class KundaliRequest(BaseModel):
    """
    Birth details for a kundali. Time of birth is optional.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    date_of_birth: str
    time_of_birth: Optional[str] = None
    place_of_birth: Optional[str] = None
    latitude: float
    longitude: float
    timezone: str = "Asia/Kolkata"
    gender: Optional[str] = None
    user_id: Optional[str] = None


class KundaliService:
    """
    Core orchestration service for kundali generation.

    The chart is computed only when a time of birth is given. When
    the ephemeris fails the result degrades to numerology only.
    """

    def __init__(
        self,
        insights: InsightService,
        engine: Optional[KundaliEngine] = None,
        calculator: Optional[NumerologyCalculator] = None,
        interpreter: Optional[InterpretationService] = None,
        today: Callable[[], date] = date.today,
    ):
        self.insights = insights
        self.engine = engine or KundaliEngine()
        self.calculator = calculator or NumerologyCalculator()
        self.interpreter = interpreter or InterpretationService()
        self.today = today

    async def generate(self, request: KundaliRequest) -> Dict[str, Any]:
        """
        Raises InvalidBirthDataError for out-of-range or malformed input.
        """

        # 1. Validate
        validate_birth_data(
            request.latitude,
            request.longitude,
            request.date_of_birth,
            request.time_of_birth,
        )

        birth = BirthDate.parse(request.date_of_birth)
        profile = self.calculator.calculate(request.name, birth)

        # 2. Chart (only with a time of birth)
        bundle = self._chart(request) if request.time_of_birth else None
        has_vedic_chart = bundle is not None

        # 3. Template reading
        reading = self.interpreter.vedic_reading(
            bundle,
            InterpretationContext(
                name=request.name,
                has_time_of_birth=has_vedic_chart,
                gender=request.gender,
            ),
        )

        # 4. AI insight
        nakshatra = bundle.chart.moon.nakshatra if bundle else "Unknown"
        insight = await self.insights.kundali_insight(
            request.name,
            nakshatra,
            reading,
            user_id=request.user_id,
        )

        return {
            "name": request.name,
            "has_vedic_chart": has_vedic_chart,
            "confidence": "high" if has_vedic_chart else "medium",
            "calculation_method": "simplified_ephemeris" if has_vedic_chart else "numerology_only",
            "numerology": profile.model_dump(mode="json"),
            "natal_chart": bundle.chart.model_dump(mode="json") if bundle else None,
            "varga_charts": bundle.vargas.model_dump(mode="json") if bundle else None,
            "dasha": bundle.dasha.model_dump(mode="json") if bundle else None,
            "yogas": [y.model_dump(mode="json") for y in bundle.yogas] if bundle else [],
            "reading": reading.model_dump(mode="json"),
            "insight": insight,
        }

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _chart(self, request: KundaliRequest) -> Optional[KundaliBundle]:
        try:
            birth_date, birth_time = parse_birth_moment(
                request.date_of_birth, request.time_of_birth
            )
            return self.engine.generate(
                BirthInput(
                    birth_date=birth_date,
                    birth_time=birth_time,
                    latitude=request.latitude,
                    longitude=request.longitude,
                    timezone=request.timezone,
                ),
                on=self.today(),
            )
        except ChartUnavailableError as exc:
            logger.warning(f"Chart unavailable for {request.name}, numerology only: {exc}")
            return None
