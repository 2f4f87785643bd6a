"""
Repeating-key length estimation by normalized Hamming distance.

Two ciphertext blocks encrypted under the same key bytes differ only as much
as their plaintexts do. Divided by the block length, that distance is lowest
near the true key length (or one of its multiples).
"""

import logging
from typing import List

from xorbreak.error_handling import InvalidArgumentError
from xorbreak.models import KeysizeCandidate
from xorbreak.utils.xor_tools import XORTools

logger = logging.getLogger(__name__)


class KeysizeEstimator:
    """Ranks candidate key lengths for repeating-key XOR ciphertext"""

    def __init__(self, min_keysize: int = 2, max_keysize: int = 40, sample_pairs: int = 8):
        if min_keysize < 1:
            raise InvalidArgumentError(f"min_keysize must be >= 1, got {min_keysize}")
        if sample_pairs < 1:
            raise InvalidArgumentError(f"sample_pairs must be >= 1, got {sample_pairs}")
        self.min_keysize = min_keysize
        self.max_keysize = max_keysize
        self.sample_pairs = sample_pairs

    def score_keysize(self, data: bytes, keysize: int) -> KeysizeCandidate:
        """
        Normalized Hamming distance for one keysize.

        Samples up to ``sample_pairs`` adjacent window pairs at offsets
        2*keysize*i and 2*keysize*i + keysize. The distance is normalized by
        keysize times ``sample_pairs`` even when fewer pairs fit; ``pairs``
        counts the pairs sampled and is 0 when none fit.
        """
        total = 0
        pairs = 0
        for i in range(self.sample_pairs):
            start = 2 * keysize * i
            if start + 2 * keysize > len(data):
                break
            first = data[start:start + keysize]
            second = data[start + keysize:start + 2 * keysize]
            total += XORTools.hamming_distance(first, second)
            pairs += 1

        if pairs == 0:
            return KeysizeCandidate(keysize=keysize, distance=float('inf'), pairs=0)
        return KeysizeCandidate(keysize=keysize, distance=total / (keysize * self.sample_pairs),
                                pairs=pairs)

    def rank(self, data: bytes) -> List[KeysizeCandidate]:
        """All usable keysizes, lowest distance first"""
        max_keysize = min(self.max_keysize, len(data) // 2)

        results = []
        for keysize in range(self.min_keysize, max_keysize + 1):
            candidate = self.score_keysize(data, keysize)
            if candidate.pairs == 0:
                continue
            results.append(candidate)

        # Stable: equal distances keep ascending keysize order
        results.sort(key=lambda c: c.distance)
        return results

    def estimate(self, data: bytes, top_n: int = 3) -> List[KeysizeCandidate]:
        """
        The ``top_n`` most likely keysizes.

        Args:
            data: Raw ciphertext
            top_n: Number of candidates to return

        Returns:
            Up to top_n KeysizeCandidate objects, best first
        """
        if top_n < 1:
            raise InvalidArgumentError(f"top_n must be >= 1, got {top_n}")

        ranked = self.rank(data)[:top_n]
        logger.info("Candidate keysizes: " + ", ".join(str(c.keysize) for c in ranked))
        for candidate in ranked:
            logger.debug(str(candidate))
        return ranked
