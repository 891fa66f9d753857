import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from numencoach.domain.kundali.schemas import SIGNS, KundaliBundle
from numencoach.domain.numerology.calculator import number_meaning
from numencoach.domain.numerology.compatibility import round_half_up
from numencoach.domain.numerology.schemas import NumerologyProfile

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# Reading schemas
# ─────────────────────────────────────────────

class Prediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: str
    prediction: str
    timing: str
    probability: str
    duration: Optional[str] = None


class Remedy(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    remedy: str
    duration: str
    benefit: str


class VedicReading(BaseModel):
    """
    Template-based reading of a kundali (or of numerology alone).
    """
    model_config = ConfigDict(frozen=True)

    summary: str
    details: str
    confidence: str
    predictions: Tuple[Prediction, ...] = ()
    remedies: Tuple[Remedy, ...] = ()
    basis: str


class NumerologyReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    highlights: Tuple[str, ...]


@dataclass(frozen=True)
class InterpretationContext:
    name: str
    has_time_of_birth: bool
    gender: Optional[str] = None


# ─────────────────────────────────────────────
# Lookup tables
# ─────────────────────────────────────────────

# Moon sign index -> (primary nature, strength, guidance)
MOON_SIGN_TRAITS: Tuple[Tuple[str, str, str], ...] = (
    ("energetic aur leadership qualities", "quick decisions", "patience develop karein"),
    ("stable aur practical nature", "reliability", "flexibility badhayein"),
    ("communicative aur versatile", "adaptability", "focus maintain karein"),
    ("emotional aur caring", "intuition", "boundaries set karein"),
    ("confident aur creative", "leadership", "ego control karein"),
    ("analytical aur perfectionist", "attention to detail", "criticism kam karein"),
    ("balanced aur diplomatic", "harmony", "decisions jaldi lein"),
    ("intense aur transformative", "determination", "trust issues resolve karein"),
    ("optimistic aur philosophical", "wisdom", "commitment improve karein"),
    ("ambitious aur disciplined", "perseverance", "flexibility add karein"),
    ("innovative aur independent", "originality", "emotional connection badhayein"),
    ("intuitive aur compassionate", "empathy", "practical approach lein"),
)

PLANETARY_PERIOD_PREDICTIONS: Dict[str, str] = {
    "Sun": "Leadership roles aur recognition milega",
    "Moon": "Emotional stability aur family happiness",
    "Mars": "Energy aur courage badhega, property gains possible",
    "Mercury": "Communication skills improve, business growth",
    "Jupiter": "Wisdom, wealth aur spiritual growth",
    "Venus": "Love, creativity aur luxury items",
    "Saturn": "Hard work se slow but steady progress",
    "Rahu": "Unexpected opportunities, foreign connections",
    "Ketu": "Spiritual awakening, detachment from materialism",
}

DAILY_PRACTICES = (
    "Surya Namaskar daily - energy boost ke liye",
    "Hanuman Chalisa Tuesday ko - Mars ki strength ke liye",
    "White clothes Monday ko - Moon ki peace ke liye",
    "Donation Thursday ko - Jupiter ki blessings ke liye",
)

GEMSTONES = (
    "Ruby", "Pearl", "Red Coral", "Emerald",
    "Yellow Sapphire", "Diamond", "Blue Sapphire",
)

BALANCED_CHART_DETAILS = "Aapka chart balanced hai - steady progress expected."


class InterpretationService:
    """
    Turns computed numbers and charts into template text.

    No LLM, no I/O: every reading here is deterministic, so it doubles
    as the fallback when AI insight is unavailable.
    """

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def numerology_reading(
        self,
        name: str,
        profile: NumerologyProfile,
    ) -> NumerologyReading:
        life_path = number_meaning(profile.life_path_number)

        highlights = tuple(
            f"{label} {number} ({number_meaning(number)['keyword']}): "
            f"{number_meaning(number)['trait']}"
            for label, number in (
                ("Life Path", profile.life_path_number),
                ("Expression", profile.expression_number),
                ("Soul Urge", profile.soul_urge_number),
                ("Personality", profile.personality_number),
                ("Birthday", profile.birthday_number),
                ("Maturity", profile.maturity_number),
            )
        )

        return NumerologyReading(
            summary=(
                f"{name}, aapka Life Path {profile.life_path_number} hai - "
                f"{life_path['keyword']}, {life_path['trait']}."
            ),
            highlights=highlights,
        )

    def vedic_reading(
        self,
        bundle: Optional[KundaliBundle],
        context: InterpretationContext,
    ) -> VedicReading:
        """
        Reading for a kundali; numerology-only when there is no chart.
        """
        if bundle is None:
            return self.numerology_only_reading(context)

        try:
            moon_sign = bundle.chart.moon.sign

            return VedicReading(
                summary=self._summary(moon_sign, context),
                details=self._details(bundle),
                confidence="high" if context.has_time_of_birth else "medium",
                predictions=tuple(self._predictions(bundle)),
                remedies=tuple(self._remedies(moon_sign)),
                basis="Vedic Astrology + Numerology",
            )
        except (KeyError, IndexError, ValueError) as exc:
            logger.warning(f"Interpretation failed for {context.name}: {exc}")
            return self.fallback_reading(context)

    def numerology_only_reading(self, context: InterpretationContext) -> VedicReading:
        return VedicReading(
            summary=(
                f"{context.name}, time of birth ke bina basic analysis. "
                "Complete Kundali ke liye exact time chahiye."
            ),
            details="Numerology-based insights available. Vedic chart ke liye birth time add karein.",
            confidence="medium",
            predictions=(
                Prediction(
                    period="General",
                    prediction="Name-based energy analysis shows positive traits",
                    timing="Ongoing",
                    probability="medium",
                ),
            ),
            remedies=(
                Remedy(
                    type="General",
                    remedy="Daily meditation aur positive thinking",
                    duration="Daily practice",
                    benefit="Mental peace and clarity",
                ),
            ),
            basis="Numerology Only",
        )

    def fallback_reading(self, context: InterpretationContext) -> VedicReading:
        return VedicReading(
            summary=f"{context.name}, aapka chart unique hai. Personal consultation recommended.",
            details="Chart analysis mein technical issue. Manual review required for accurate insights.",
            confidence="low",
            remedies=(
                Remedy(
                    type="General",
                    remedy="Om Gam Ganapataye Namaha - obstacles removal ke liye",
                    duration="108 times daily",
                    benefit="General protection and success",
                ),
            ),
            basis="Fallback Analysis",
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _summary(self, moon_sign: int, context: InterpretationContext) -> str:
        primary, strength, guidance = MOON_SIGN_TRAITS[moon_sign]
        return (
            f"{context.name}, aapka Moon {SIGNS[moon_sign]} mein hai - {primary}. "
            f"{strength} aur {guidance}."
        )

    def _details(self, bundle: KundaliBundle) -> str:
        planets = bundle.chart.planets
        analyses: List[str] = []

        jupiter = planets.get("Jupiter")
        if jupiter and jupiter.house in (10, 5):
            analyses.append("Career mein growth expected hai - Jupiter favorable position mein hai")

        venus = planets.get("Venus")
        if venus and venus.house in (7, 12):
            analyses.append("Love life mein positive changes aane wale hain")

        mars = planets.get("Mars")
        if mars and mars.house == 6:
            analyses.append("Health par dhyan dein - regular exercise beneficial hai")

        for yoga in bundle.yogas:
            analyses.append(f"{yoga.name} present hai - {yoga.effects[0]}" if yoga.effects else yoga.name)

        return ". ".join(analyses) if analyses else BALANCED_CHART_DETAILS

    def _predictions(self, bundle: KundaliBundle) -> List[Prediction]:
        current = bundle.dasha.current
        if current is None:
            return []

        maha, sub = current.maha.planet, current.sub.planet
        return [
            Prediction(
                period=f"{maha} Mahadasha",
                duration=f"{round_half_up(current.remaining_years)} years remaining",
                prediction=self._period_prediction(maha),
                timing="Current period",
                probability="high",
            ),
            Prediction(
                period=f"{maha}-{sub} Antardasha",
                duration=f"{round_half_up(current.remaining_months)} months remaining",
                prediction=self._period_prediction(sub),
                timing=f"Until {current.sub.end_date.isoformat()}",
                probability="medium",
            ),
        ]

    def _period_prediction(self, planet: str) -> str:
        return PLANETARY_PERIOD_PREDICTIONS.get(
            planet, "Mixed results expected - patience required"
        )

    def _remedies(self, moon_sign: int) -> List[Remedy]:
        return [
            Remedy(
                type="Daily Practice",
                remedy=DAILY_PRACTICES[moon_sign % len(DAILY_PRACTICES)],
                duration="Daily for 40 days",
                benefit="Overall life improvement",
            ),
            Remedy(
                type="Gemstone",
                remedy=f"{GEMSTONES[moon_sign % len(GEMSTONES)]} wear करें",
                duration="After astrological consultation",
                benefit="Planetary strength enhancement",
            ),
        ]
