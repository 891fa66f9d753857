class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidBirthDataError(KundaliError):
    """
    Raised when birth inputs are invalid or inconsistent.
    """
    pass


class ChartUnavailableError(KundaliError):
    """
    Raised when the natal chart cannot be computed.

    Callers fall back to a numerology-only reading.
    """
    pass


class UnsupportedDivisionError(KundaliError):
    """
    Raised when a divisional chart with an unsupported divisor is requested.
    """
    pass
