from typing import Any, Dict, Optional

from numencoach.domain.numerology.compatibility import (
    CompatibilityScorer,
    life_path_score,
)
from numencoach.domain.numerology.schemas import PersonInput
from numencoach.services.insight_service import InsightService
from numencoach.services.numerology_service import BirthDateLike, coerce_birth_date


class CompatibilityService:
    """
    Couple compatibility: weighted score, life-area scores,
    rule-based analysis and AI insight.
    """

    def __init__(
        self,
        insights: InsightService,
        scorer: Optional[CompatibilityScorer] = None,
    ):
        self.insights = insights
        self.scorer = scorer or CompatibilityScorer()

    async def analyze(
        self,
        name1: str,
        date1: BirthDateLike,
        name2: str,
        date2: BirthDateLike,
        *,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        person1 = self._person(name1, date1)
        person2 = self._person(name2, date2)

        result = self.scorer.score(person1, person2)
        category_scores = self.scorer.category_scores(person1.profile, person2.profile)
        analysis = self.scorer.detailed_analysis(category_scores)

        insight = await self.insights.compatibility_insight(
            person1.name,
            person1.profile.life_path_number,
            person2.name,
            person2.profile.life_path_number,
            result.score,
            context=result.summary,
            user_id=user_id,
        )

        return {
            "partner1": self._partner(person1),
            "partner2": self._partner(person2),
            "result": result.model_dump(mode="json"),
            "life_path_score": life_path_score(
                person1.profile.life_path_number,
                person2.profile.life_path_number,
            ),
            "category_scores": category_scores.model_dump(mode="json"),
            "detailed_analysis": analysis.model_dump(mode="json"),
            "insight": insight,
        }

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _person(self, name: str, birth_date: BirthDateLike) -> PersonInput:
        name = name.strip()
        if not name:
            raise ValueError("Both names are required")

        birth = coerce_birth_date(birth_date)
        profile = self.scorer.calculator.calculate(name, birth)
        return PersonInput(name=name, birth_date=birth, profile=profile)

    def _partner(self, person: PersonInput) -> Dict[str, Any]:
        return {
            "name": person.name,
            "birth_date": person.birth_date.as_date().isoformat(),
            "profile": person.profile.model_dump(mode="json"),
        }
