from numencoach.domain.kundali.divisional.base import BaseDivisionalCalculator


class D9Calculator(BaseDivisionalCalculator):
    """
    Navamsha (D9): nine parts of 3°20′ per sign.
    """

    chart_type = "D9"
    divisor = 9
