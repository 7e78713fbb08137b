"""Punycode (RFC 3492) encoding and decoding.

This module implements the Bootstring algorithm with the Punycode parameters
from RFC 3492. It converts between an unrestricted Unicode string and an ASCII
string built from the basic code points of the input, a delimiter and a
sequence of generalized variable-length integers encoded with the base-36
digit alphabet ``a-z0-9``.

Both directions are pure functions: all state is local to the call, so they
are safe to use from any number of threads or tasks at once.

Two edge cases are fixed by policy:
- ``encode`` returns an all-ASCII string unchanged unless it contains the
  delimiter, in which case the general path is taken so the result still
  decodes to the input (``"a-b"`` encodes to ``"a-b-"``).
- ``decode`` treats a string without delimiter as having no basic code points
  at all, exactly as RFC 3492 section 6.2 does. ``"abc"`` is not passed
  through.
"""

from punycode_mcp_server.exceptions import InvalidCodePointError, MalformedInputError

# RFC 3492 section 5 parameter values
BASE = 36
TMIN = 1
TMAX = 26
SKEW = 38
DAMP = 700
INITIAL_BIAS = 72
INITIAL_N = 128
DELIMITER = "-"

ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
_DIGIT_VALUES = {char: value for value, char in enumerate(ALPHABET)}

MAX_CODE_POINT = 0x10FFFF
SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF


def adapt_bias(delta: int, num_points: int, first_time: bool) -> int:
    """Bias adaptation function from RFC 3492 section 6.1.

    Args:
        delta: The delta that was just encoded or decoded.
        num_points: Number of code points handled so far, including this one.
        first_time: True only for the very first delta of a string.

    Returns:
        int: The new bias, always >= 0.
    """
    delta = delta // DAMP if first_time else delta // 2
    delta += delta // num_points
    k = 0
    while delta > ((BASE - TMIN) * TMAX) // 2:
        delta //= BASE - TMIN
        k += BASE
    return k + ((BASE - TMIN + 1) * delta) // (delta + SKEW)


def threshold(k: int, bias: int) -> int:
    """Return the digit threshold ``t`` for position ``k``, clamped to [TMIN, TMAX]."""
    if k <= bias:
        return TMIN
    if k >= bias + TMAX:
        return TMAX
    return k - bias


def digit_value(char: str) -> int | None:
    """Map a Punycode digit character to its value, or None if not in the alphabet."""
    return _DIGIT_VALUES.get(char)


def digit_char(digit: int) -> str:
    """Map a digit value in [0, 35] to its Punycode character."""
    if not 0 <= digit < BASE:
        raise ValueError(f"Digit value {digit} is outside the base-{BASE} alphabet")
    return ALPHABET[digit]


def is_encodable_code_point(value: int) -> bool:
    """Validity check applied to non-ASCII code points before encoding.

    The bound is narrower than the plain surrogate exclusion: values up to
    U+D87F are accepted and the upper limit is 0x1FFFFF.
    """
    return value < 0xD880 or 0xE000 <= value <= 0x1FFFFF


def is_decodable_code_point(value: int) -> bool:
    """Validity check applied to every code point produced by ``decode``."""
    if value < INITIAL_N or value > MAX_CODE_POINT:
        return False
    return not SURROGATE_FIRST <= value <= SURROGATE_LAST


def _encode_integer(value: int, bias: int) -> str:
    """Encode ``value`` as a generalized variable-length integer (section 3.3)."""
    digits = []
    k = BASE
    while True:
        t = threshold(k, bias)
        if value < t:
            break
        digits.append(digit_char(t + (value - t) % (BASE - t)))
        value = (value - t) // (BASE - t)
        k += BASE
    digits.append(digit_char(value))
    return "".join(digits)


def encode(text: str) -> str:
    """Encode a Unicode string to Punycode.

    Args:
        text: The string to encode. May be empty.

    Returns:
        str: The ASCII Punycode form of ``text``, without any ACE prefix.

    Raises:
        InvalidCodePointError: If a non-ASCII code point fails
            ``is_encodable_code_point``.
    """
    code_points = [ord(char) for char in text]
    output = []
    for value in code_points:
        if value < INITIAL_N:
            output.append(chr(value))
        elif not is_encodable_code_point(value):
            raise InvalidCodePointError(
                f"Code point U+{value:04X} cannot be encoded", code_point=value
            )

    basic = len(output)
    if basic == len(code_points) and DELIMITER not in output:
        return text
    if basic > 0:
        output.append(DELIMITER)

    n = INITIAL_N
    delta = 0
    bias = INITIAL_BIAS
    handled = basic
    while handled < len(code_points):
        candidates = [value for value in code_points if value >= n]
        if not candidates:
            raise InvalidCodePointError(f"No code point left to encode at or above U+{n:04X}")
        m = min(candidates)
        delta += (m - n) * (handled + 1)
        n = m
        for value in code_points:
            if value < n:
                delta += 1
            elif value == n:
                output.append(_encode_integer(delta, bias))
                bias = adapt_bias(delta, handled + 1, handled == basic)
                delta = 0
                handled += 1
        delta += 1
        n += 1

    return "".join(output)


def decode(text: str) -> str:
    """Decode a Punycode string to Unicode.

    Args:
        text: The Punycode form, without any ACE prefix. May be empty.

    Returns:
        str: The decoded Unicode string.

    Raises:
        MalformedInputError: If a digit is outside ``a-z0-9``, the basic part
            contains a non-ASCII character, or the input ends inside a digit group.
        InvalidCodePointError: If a decoded code point is below 0x80, a
            surrogate or above 0x10FFFF. Values that overflow the code point
            range are rejected as soon as the digit that overflows is read.
    """
    delimiter_pos = text.rfind(DELIMITER)
    if delimiter_pos >= 0:
        output = list(text[:delimiter_pos])
        position = delimiter_pos + 1
    else:
        output = []
        position = 0

    for index, char in enumerate(output):
        if ord(char) >= INITIAL_N:
            raise MalformedInputError(
                f"Non-ASCII character '{char}' in the basic code point section",
                position=index,
            )

    n = INITIAL_N
    i = 0
    bias = INITIAL_BIAS
    while position < len(text):
        old_i = i
        w = 1
        k = BASE
        while True:
            if position >= len(text):
                raise MalformedInputError("Input ends inside a digit sequence", position=position)
            char = text[position]
            digit = digit_value(char)
            if digit is None:
                raise MalformedInputError(
                    f"Character '{char}' is not a Punycode digit", position=position
                )
            position += 1
            i += digit * w
            # i never shrinks inside a group, so past this point n cannot be valid
            candidate = n + i // (len(output) + 1)
            if candidate > MAX_CODE_POINT:
                raise InvalidCodePointError(
                    f"Decoded value {candidate:#x} is not a valid code point",
                    code_point=candidate,
                )
            t = threshold(k, bias)
            if digit < t:
                break
            w *= BASE - t
            k += BASE

        bias = adapt_bias(i - old_i, len(output) + 1, old_i == 0)
        n += i // (len(output) + 1)
        i %= len(output) + 1
        if not is_decodable_code_point(n):
            raise InvalidCodePointError(f"Decoded value {n:#x} is not a valid code point", code_point=n)
        output.insert(i, chr(n))
        i += 1

    return "".join(output)
