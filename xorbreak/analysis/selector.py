"""Choice of the best full key among candidate keysizes"""

import logging
import math
from typing import Iterable, Optional, Tuple

from xorbreak.analysis.single_byte import SingleByteXORSearch

logger = logging.getLogger(__name__)


class CandidateSelector:
    """
    Ranks full candidate keys against each other.

    A key's score is the best single-byte fit score of the key bytes
    themselves. This is only a relative heuristic across keysizes; it says
    nothing about plaintext quality.
    """

    def __init__(self, score_threshold: float = 40.0, printable_ratio_threshold: float = 0.7):
        self.searcher = SingleByteXORSearch(score_threshold, printable_ratio_threshold)

    def score_key(self, key: bytes) -> float:
        """Best fit score of the key bytes, or inf when nothing passes the filter"""
        candidate = self.searcher.best_fit(key)
        return candidate.score if candidate is not None else math.inf

    def select(self, keys: Iterable[bytes]) -> Optional[Tuple[bytes, float]]:
        """Best (key, score) pair; empty keys are skipped, first-seen minimum wins"""
        best: Optional[Tuple[bytes, float]] = None
        for key in keys:
            if not key:
                continue
            score = self.score_key(key)
            logger.debug(f"Key {key.hex()} scored {score:.2f}")
            if best is None or score < best[1]:
                best = (key, score)
        return best

    def select_best(self, keys: Iterable[bytes]) -> Optional[bytes]:
        """The lowest-scoring nonempty key, or None if every key is empty"""
        best = self.select(keys)
        return best[0] if best is not None else None
