MASTER_NUMBERS = frozenset({11, 22, 33})


def reduce_number(num: int, keep_master: bool = True) -> int:
    """
    Reduce a non-negative integer to a single digit by summing its digits.

    When `keep_master` is set, 11, 22 and 33 are returned as soon as
    they appear, including as the input itself.
    """
    if num < 0:
        raise ValueError(f"Cannot reduce a negative number: {num}")

    if keep_master and num in MASTER_NUMBERS:
        return num

    while num > 9:
        num = sum(int(digit) for digit in str(num))
        if keep_master and num in MASTER_NUMBERS:
            return num

    return num


def digits_of(num: int) -> list[int]:
    """Decimal digits of a non-negative integer, most significant first."""
    return [int(digit) for digit in str(num)]
