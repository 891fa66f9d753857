from numencoach.domain.kundali.divisional.base import BaseDivisionalCalculator


class D10Calculator(BaseDivisionalCalculator):
    """
    Dashamsha (D10): ten parts of 3° per sign.
    Used primarily for career and professional analysis.
    """

    chart_type = "D10"
    divisor = 10
