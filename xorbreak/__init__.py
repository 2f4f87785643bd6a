"""
xorbreak - repeating-key XOR cryptanalysis.

Recovers the key and plaintext of repeating-key XOR ciphertext using
normalized Hamming distance for the keysize and Chi-square letter-frequency
scoring for each key byte.
"""

from .__version__ import __version__
from .breaker import RepeatingKeyXORBreaker, break_repeating_key_xor
from .config import BreakerConfig, DetectionConfig
from .error_handling import (
    XorBreakError,
    InvalidArgumentError,
    NoCandidateFoundError,
    MalformedInputError,
    InputError,
    ConfigurationError,
)

__all__ = [
    '__version__',
    'RepeatingKeyXORBreaker',
    'break_repeating_key_xor',
    'BreakerConfig',
    'DetectionConfig',
    'XorBreakError',
    'InvalidArgumentError',
    'NoCandidateFoundError',
    'MalformedInputError',
    'InputError',
    'ConfigurationError',
]
