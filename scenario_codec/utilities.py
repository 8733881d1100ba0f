#  Copyright 2023-2025 $author, All rights reserved.
#
#  For licensing terms, Please find the licensing terms in the closest
#  LICENSE.txt in this repository file going up the directory tree.
#

import re

_whitespace_re: re.Pattern[str] = re.compile(r"\s+")

def max_value_for_width(bit_width: int) -> int:
    """
    Get the largest unsigned value a field of bit_width bits can hold
    :param bit_width: The field width in bits
    :return: The maximum value

    >>> max_value_for_width(1)
    1
    >>> max_value_for_width(5)
    31
    >>> max_value_for_width(7)
    127
    """
    return (1 << bit_width) - 1

def clamp(value, lower: int, upper: int) -> int:
    """
    Clamp value into [lower, upper], non-integers are truncated after bounds are checked,
    so infinities clamp to the bounds and NaN becomes lower

    >>> clamp(40, 0, 31)
    31
    >>> clamp(-3, 0, 31)
    0
    >>> clamp(7.9, 0, 31)
    7
    >>> clamp(1, 2, 5)
    2
    >>> clamp(float("inf"), 0, 31), clamp(float("-inf"), 0, 31), clamp(float("nan"), 0, 31)
    (31, 0, 0)
    """
    if value != value:
        return lower
    if value >= upper:
        return upper
    if value <= lower:
        return lower
    return int(value)

def clean_code(code: str) -> str:
    """
    Remove all whitespace from a pasted scenario code

    >>> clean_code("  Vx Ab\\n-_ ")
    'VxAb-_'
    >>> clean_code(" \\t ")
    ''
    """
    return _whitespace_re.sub("", code.strip())

if __name__ == "__main__":
    import doctest
    doctest.testmod()
