from typing import Dict, List

from numencoach.domain.kundali.schemas import NatalChart, VargaCharts
from numencoach.domain.kundali.divisional.base import BaseDivisionalCalculator
from numencoach.domain.kundali.divisional.d9 import D9Calculator
from numencoach.domain.kundali.divisional.d10 import D10Calculator
from numencoach.domain.kundali.divisional.d12 import D12Calculator


class DivisionalBuilder:
    """
    Orchestrates the calculation of all divisional charts
    for a given natal chart.
    """

    def __init__(
        self,
        calculators: List[BaseDivisionalCalculator] | None = None
    ):
        # Default supported divisionals
        self.calculators = calculators or [
            D9Calculator(),
            D10Calculator(),
            D12Calculator(),
        ]

    def build(
        self,
        chart: NatalChart
    ) -> VargaCharts:
        """
        Build all supported divisional charts.
        """
        charts: Dict[str, Dict[str, int]] = {}

        for calculator in self.calculators:
            charts[calculator.chart_type] = calculator.calculate(chart)

        return VargaCharts(**charts)
