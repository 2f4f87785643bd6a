"""Cryptanalysis components for repeating-key XOR"""

from .frequency import ENGLISH_FREQUENCIES, frequency, fit_score, printable_ratio
from .single_byte import SingleByteXORSearch, detect_single_byte_xor
from .keysize import KeysizeEstimator
from .reconstructor import KeyReconstructor, split_blocks, transpose_blocks
from .selector import CandidateSelector

__all__ = [
    'ENGLISH_FREQUENCIES',
    'frequency',
    'fit_score',
    'printable_ratio',
    'SingleByteXORSearch',
    'detect_single_byte_xor',
    'KeysizeEstimator',
    'KeyReconstructor',
    'split_blocks',
    'transpose_blocks',
    'CandidateSelector',
]
