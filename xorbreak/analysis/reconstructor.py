"""
Block transposition and full-key reconstruction.

Ciphertext bytes at the same position modulo the keysize were all XORed with
the same key byte. Regrouping them into columns turns one repeating-key
problem into ``keysize`` independent single-byte problems.
"""

import logging
from typing import List

from xorbreak.analysis.single_byte import SingleByteXORSearch
from xorbreak.error_handling import InvalidArgumentError
from xorbreak.models import KeyReconstruction

logger = logging.getLogger(__name__)


def _check_keysize(keysize: int):
    if keysize < 1:
        raise InvalidArgumentError(f"keysize must be >= 1, got {keysize}")


def split_blocks(data: bytes, keysize: int) -> List[bytes]:
    """Consecutive keysize-byte blocks; a short trailing block is dropped"""
    _check_keysize(keysize)
    return [data[i:i + keysize] for i in range(0, len(data) - keysize + 1, keysize)]


def transpose_blocks(blocks: List[bytes], keysize: int) -> List[bytes]:
    """
    Column j holds byte j of every block, in block order.

    Blocks shorter than keysize contribute only the bytes they have.
    """
    _check_keysize(keysize)
    columns = [bytearray() for _ in range(keysize)]
    for block in blocks:
        for j, byte in enumerate(block[:keysize]):
            columns[j].append(byte)
    return [bytes(column) for column in columns]


class KeyReconstructor:
    """Recovers one key byte per column for a given keysize"""

    def __init__(self, score_threshold: float = 40.0, printable_ratio_threshold: float = 0.7):
        self.searcher = SingleByteXORSearch(score_threshold, printable_ratio_threshold)

    def reconstruct(self, data: bytes, keysize: int) -> KeyReconstruction:
        """
        Recover the full key for one keysize.

        Fails atomically: if any column has no candidate the result carries
        no key bytes at all.
        """
        columns = transpose_blocks(split_blocks(data, keysize), keysize)

        key = bytearray()
        for index, column in enumerate(columns):
            candidate = self.searcher.best_fit(column)
            if candidate is None:
                logger.debug(f"Keysize {keysize}: column {index} has no candidate")
                return KeyReconstruction.failure(keysize, index)
            logger.debug(f"Keysize {keysize}: column {index} -> 0x{candidate.key:02X} "
                         f"(chi2 {candidate.score:.2f})")
            key.append(candidate.key)

        return KeyReconstruction(keysize=keysize, key=bytes(key))
