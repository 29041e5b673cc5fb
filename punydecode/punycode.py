"""Punycode (RFC 3492) decoding"""

from collections.abc import Iterator, MutableSequence, Sequence
from typing import NamedTuple

from punydecode.unicode import code_points_to_text

# --- config ---
BASE = 36
TMIN = 1
TMAX = 26
SKEW = 38
DAMP = 700
INITIAL_BIAS = 72
INITIAL_N = 0x80
DELIMITER = 0x2D  # "-"
MAXINT = 0xFFFFFFFF  # uint32

Encoded = bytes | bytearray | memoryview | str | Sequence[int]


class PunycodeError(ValueError):
    """Base class for decoding failures"""

    kind = "error"

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class BadInput(PunycodeError):
    """Input is not a well-formed Punycode string"""

    kind = "bad_input"


class Overflow(PunycodeError):
    """A decoded value would not fit in an unsigned 32-bit integer"""

    kind = "overflow"


class Insertion(NamedTuple):
    """One extended code point recovered from the encoded suffix"""

    position: int
    code_point: int
    bias: int
    consumed: int


def to_code_units(data: Encoded) -> Sequence[int]:
    """View the input as a sequence of ints, rejecting anything outside ASCII"""
    units: Sequence[int] = [ord(ch) for ch in data] if isinstance(data, str) else data

    for pos, cp in enumerate(units):
        if not 0 <= cp < 0x80:
            raise BadInput(f"Non-ASCII value {cp:#x} in input", pos)

    return units


def is_delimiter(cp: int) -> bool:
    """Check whether a code unit is the prefix/suffix delimiter"""
    return cp == DELIMITER


def find_delimiter(data: Sequence[int]) -> int:
    """
    Return the index of the last delimiter, scanning from the end.
    Returns len(data) when there is none.
    """
    for pos in range(len(data) - 1, -1, -1):
        if is_delimiter(data[pos]):
            return pos
    return len(data)


def decode_digit(cp: int) -> int:
    """Map a code unit to its base-36 digit value, or BASE if it is not a digit"""
    if 0x30 <= cp <= 0x39:  # 0-9
        return cp - 22
    if 0x41 <= cp <= 0x5A:  # A-Z
        return cp - 0x41
    if 0x61 <= cp <= 0x7A:  # a-z
        return cp - 0x61
    return BASE


def adapt(delta: int, numpoints: int, firsttime: bool) -> int:
    """Bias adaptation function from RFC 3492 section 6.1"""
    delta = delta // DAMP if firsttime else delta // 2
    delta += delta // numpoints

    k = 0
    while delta > ((BASE - TMIN) * TMAX) // 2:
        delta //= BASE - TMIN
        k += BASE

    return k + (BASE - TMIN + 1) * delta // (delta + SKEW)


def _threshold(k: int, bias: int) -> int:
    if k <= bias:
        return TMIN
    if k >= bias + TMAX:
        return TMAX
    return k - bias


def iter_insertions(
    suffix: Sequence[int], prefix_len: int, offset: int = 0
) -> Iterator[Insertion]:
    """
    Decode the part after the delimiter into insertions, one per
    generalized variable-length integer.
    `offset` is only used to report error positions relative to the full input.
    """
    n = INITIAL_N
    bias = INITIAL_BIAS
    i = 0
    out = prefix_len
    pos = 0

    while pos < len(suffix):
        start = pos
        oldi = i
        w = 1
        k = BASE

        while True:
            if pos >= len(suffix):
                raise BadInput("Encoded suffix ends in the middle of a number", offset + pos)

            digit = decode_digit(suffix[pos])
            if digit >= BASE:
                raise BadInput(
                    f"Invalid digit {chr(suffix[pos])!r} in encoded suffix", offset + pos
                )
            pos += 1

            if digit > (MAXINT - i) // w:
                raise Overflow("Insertion delta overflows", offset + pos - 1)
            i += digit * w

            t = _threshold(k, bias)
            if digit < t:
                break

            if w > MAXINT // (BASE - t):
                raise Overflow("Digit weight overflows", offset + pos - 1)
            w *= BASE - t
            k += BASE

        bias = adapt(i - oldi, out + 1, oldi == 0)

        if i // (out + 1) > MAXINT - n:
            raise Overflow("Code point overflows", offset + pos - 1)
        n += i // (out + 1)
        i %= out + 1

        yield Insertion(i, n, bias, pos - start)

        i += 1
        out += 1


def decode_into(data: Encoded, output: MutableSequence[int]) -> MutableSequence[int]:
    """
    Decode a Punycode label, appending its code points to `output`.
    `output` is only extended once the whole label has decoded.
    """
    units = to_code_units(data)
    delimiter = find_delimiter(units)

    if delimiter == len(units):
        output.extend(units)
        return output

    decoded = list(units[:delimiter])
    for step in iter_insertions(units[delimiter + 1 :], delimiter, delimiter + 1):
        decoded.insert(step.position, step.code_point)

    output.extend(decoded)
    return output


def decode(data: Encoded) -> list[int]:
    """Decode a Punycode label into a list of code points"""
    result: list[int] = []
    decode_into(data, result)
    return result


def decode_text(data: Encoded) -> str:
    """Decode a Punycode label into a string"""
    code_points = decode(data)
    try:
        return code_points_to_text(code_points)
    except ValueError as e:
        raise BadInput(str(e)) from e
