from numencoach.domain.kundali.divisional.base import BaseDivisionalCalculator


class D12Calculator(BaseDivisionalCalculator):
    """
    Dwadashamsha (D12): twelve parts of 2°30′ per sign.
    """

    chart_type = "D12"
    divisor = 12
