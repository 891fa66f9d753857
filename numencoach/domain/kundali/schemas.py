from datetime import date
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


SIGNS = (
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)


# ─────────────────────────────────────────────
# Core Atomic Schemas
# ─────────────────────────────────────────────

class PlanetPosition(BaseModel):
    """
    Sidereal position of a single planet (approximate).
    """
    model_config = ConfigDict(frozen=True)

    name: str
    longitude: float
    sign: int = Field(..., ge=0, le=11)
    degree: float
    nakshatra: str
    nakshatra_index: int = Field(..., ge=0, le=26)
    pada: int = Field(..., ge=1, le=4)
    retrograde: bool = False
    house: int = Field(..., ge=1, le=12)

    @computed_field
    @property
    def sign_name(self) -> str:
        return SIGNS[self.sign]


# ─────────────────────────────────────────────
# Natal Chart (D1)
# ─────────────────────────────────────────────

class NatalChart(BaseModel):
    """
    Simplified natal chart.

    Positions come from truncated mean-motion formulas, not a real
    ephemeris, and are only reproducible approximations.
    """
    model_config = ConfigDict(frozen=True)

    ascendant: int = Field(..., ge=0, le=11)
    houses: Tuple[int, ...]
    planets: Dict[str, PlanetPosition]
    ayanamsa: float
    julian_day: float
    sidereal_time: float

    @computed_field
    @property
    def ascendant_sign(self) -> str:
        return SIGNS[self.ascendant]

    @property
    def moon(self) -> PlanetPosition:
        return self.planets["Moon"]


# ─────────────────────────────────────────────
# Divisional Charts
# ─────────────────────────────────────────────

class VargaCharts(BaseModel):
    """
    Planet → sign index for each divisional chart.
    """
    model_config = ConfigDict(frozen=True)

    D9: Dict[str, int] = Field(default_factory=dict)
    D10: Dict[str, int] = Field(default_factory=dict)
    D12: Dict[str, int] = Field(default_factory=dict)


# ─────────────────────────────────────────────
# Vimshottari Dasha
# ─────────────────────────────────────────────

class DashaPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    planet: str
    years: int


class DashaInterval(BaseModel):
    """
    A dated maha or sub period.
    """
    model_config = ConfigDict(frozen=True)

    planet: str
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day < self.end_date


class CurrentDasha(BaseModel):
    model_config = ConfigDict(frozen=True)

    maha: DashaInterval
    sub: DashaInterval
    remaining_years: float
    remaining_months: float


class VimshottariDasha(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence: Tuple[DashaPeriod, ...]
    starting_planet: str
    balance_years: float
    periods: Tuple[DashaInterval, ...]
    current: Optional[CurrentDasha] = None


# ─────────────────────────────────────────────
# Derived
# ─────────────────────────────────────────────

class Yoga(BaseModel):
    """
    Represents a yoga formed in the chart.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    strength: str
    effects: Tuple[str, ...] = ()


class KundaliBundle(BaseModel):
    """
    Everything derived from one set of birth details.
    """
    model_config = ConfigDict(frozen=True)

    chart: NatalChart
    vargas: VargaCharts
    dasha: VimshottariDasha
    yogas: Tuple[Yoga, ...] = ()
