"""
English letter-frequency model and Chi-square fit scoring.

The 26 Latin letters sum to 100%; space carries its own 13% weight on top.
Scores are Chi-square goodness-of-fit statistics: the sum over all 27 symbol
classes of (observed - expected)^2 / expected. Lower means closer to English.
"""

from collections import Counter
from types import MappingProxyType
from typing import Mapping, Union

from xorbreak.error_handling import InvalidArgumentError


# Relative frequencies (%) of letters and space in English text.
# Source: https://pi.math.cornell.edu/~mec/2003-2004/cryptography/subs/frequencies.html
ENGLISH_FREQUENCIES: Mapping[str, float] = MappingProxyType({
    'A': 8.12, 'B': 1.49, 'C': 2.71, 'D': 4.32, 'E': 12.02, 'F': 2.30,
    'G': 2.03, 'H': 5.92, 'I': 7.31, 'J': 0.10, 'K': 0.69, 'L': 3.98,
    'M': 2.61, 'N': 6.95, 'O': 7.68, 'P': 1.82, 'Q': 0.11, 'R': 6.02,
    'S': 6.28, 'T': 9.10, 'U': 2.88, 'V': 1.11, 'W': 2.09, 'X': 0.17,
    'Y': 2.11, 'Z': 0.07, ' ': 13.00,
})

SYMBOLS = tuple(ENGLISH_FREQUENCIES)

# Expected counts below this are skipped to avoid dividing by ~0
_MIN_EXPECTED = 1e-6

_SPACE = 0x20


def frequency(symbol: Union[str, int]) -> float:
    """
    Expected occurrence percentage of a letter or space in English.

    Accepts a single character or a byte value; case-insensitive.
    Any other symbol has frequency 0.
    """
    if isinstance(symbol, int):
        if not 0 <= symbol <= 0x7F:
            return 0.0
        symbol = chr(symbol)
    if len(symbol) != 1:
        return 0.0
    return ENGLISH_FREQUENCIES.get(symbol.upper(), 0.0)


def is_letter_or_space(byte: int) -> bool:
    return byte == _SPACE or 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def printable_ratio(data: bytes) -> float:
    """Fraction of bytes that are ASCII letters or space"""
    if not data:
        raise InvalidArgumentError("Printable ratio is undefined for empty input")
    return sum(1 for b in data if is_letter_or_space(b)) / len(data)


def fit_score(decoded: bytes) -> float:
    """
    Chi-square fit of a byte sequence against English letter frequencies.

    Letters are counted case-insensitively; bytes outside the 27 symbols
    contribute only through the deficit they leave in the expected classes.
    """
    length = len(decoded)
    counts = Counter(decoded.upper())
    score = 0.0
    for symbol, percent in ENGLISH_FREQUENCIES.items():
        expected = percent / 100.0 * length
        if expected < _MIN_EXPECTED:
            continue
        observed = counts.get(ord(symbol), 0)
        score += (observed - expected) ** 2 / expected
    return score
