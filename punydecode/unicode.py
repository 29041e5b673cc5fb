"""Unicode utilities"""

from collections.abc import Iterable

MAX_CODE_POINT = 0x10FFFF
SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF


def is_scalar_value(cp: int) -> bool:
    """Check whether a code point is a Unicode scalar value (no surrogates)"""
    return 0 <= cp <= MAX_CODE_POINT and not SURROGATE_FIRST <= cp <= SURROGATE_LAST


def format_code_point(cp: int) -> str:
    """Format a code point in U+XXXX notation"""
    return f"U+{cp:04X}"


def code_points_to_text(code_points: Iterable[int]) -> str:
    """
    Join code points into a string.
    Raises ValueError on anything that is not a Unicode scalar value.
    """
    out: list[str] = []

    for cp in code_points:
        if not is_scalar_value(cp):
            raise ValueError(f"{format_code_point(cp)} is not a Unicode scalar value")
        out.append(chr(cp))

    return "".join(out)
