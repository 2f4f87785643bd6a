"""
Repeating-key XOR breaker.

Runs the full pipeline: keysize estimation, per-keysize key reconstruction,
candidate key selection and decryption.
"""

import logging
from typing import Optional

from xorbreak.analysis.keysize import KeysizeEstimator
from xorbreak.analysis.reconstructor import KeyReconstructor
from xorbreak.analysis.selector import CandidateSelector
from xorbreak.config import BreakerConfig
from xorbreak.error_handling import (
    ErrorContext,
    InvalidArgumentError,
    NoCandidateFoundError,
    create_error,
)
from xorbreak.models import BreakResult
from xorbreak.utils.xor_tools import XORTools

logger = logging.getLogger(__name__)


class RepeatingKeyXORBreaker:
    """Recovers the key and plaintext of repeating-key XOR ciphertext"""

    def __init__(self, config: Optional[BreakerConfig] = None):
        self.config = (config or BreakerConfig()).validate()
        self.estimator = KeysizeEstimator(
            min_keysize=self.config.min_keysize,
            max_keysize=self.config.max_keysize,
            sample_pairs=self.config.sample_pairs,
        )
        self.reconstructor = KeyReconstructor(self.config.chi2_threshold, self.config.printable_ratio)
        self.selector = CandidateSelector(self.config.chi2_threshold, self.config.printable_ratio)

    def analyze(self, ciphertext: bytes) -> BreakResult:
        """
        Break ciphertext and report every intermediate result.

        Raises:
            InvalidArgumentError: If ciphertext is empty
            NoCandidateFoundError: If no candidate keysize yields a full key
        """
        if not ciphertext:
            raise InvalidArgumentError("Cannot break empty ciphertext")

        logger.info(f"Breaking {len(ciphertext)} bytes of ciphertext")
        keysizes = self.estimator.estimate(ciphertext, self.config.candidate_keysizes)

        reconstructions = []
        for candidate in keysizes:
            reconstruction = self.reconstructor.reconstruct(ciphertext, candidate.keysize)
            if reconstruction.succeeded:
                logger.info(f"Keysize {candidate.keysize}: key {reconstruction.key!r}")
            else:
                logger.warning(f"Could not find key for keysize {candidate.keysize} "
                               f"(column {reconstruction.failed_column} failed)")
            reconstructions.append(reconstruction)

        best = self.selector.select(r.key for r in reconstructions)
        if best is None:
            tried = ", ".join(str(c.keysize) for c in keysizes) or "none"
            raise create_error(
                "no_keysize",
                error_class=NoCandidateFoundError,
                context=ErrorContext(
                    function="analyze",
                    additional_info={"ciphertext_length": len(ciphertext)},
                ),
                keysizes=tried,
            )

        key, score = best
        logger.info(f"Best key: {key!r}")

        return BreakResult(
            keysizes=keysizes,
            reconstructions=reconstructions,
            key=key,
            key_score=score,
            plaintext=XORTools.repeating_key_xor(ciphertext, key),
            ciphertext_length=len(ciphertext),
        )

    def break_ciphertext(self, ciphertext: bytes) -> bytes:
        """Recovered plaintext only"""
        return self.analyze(ciphertext).plaintext


def break_repeating_key_xor(ciphertext: bytes,
                            chi2_threshold: float = 40.0,
                            candidate_keysize_count: int = 3,
                            printable_ratio_threshold: float = 0.7) -> bytes:
    """
    Recover plaintext from repeating-key XOR ciphertext.

    Args:
        ciphertext: Raw ciphertext bytes
        chi2_threshold: Chi-square threshold passed to the single-byte search
        candidate_keysize_count: How many of the best keysizes to try
        printable_ratio_threshold: Minimum letters/space fraction per column

    Returns:
        The plaintext decrypted with the best candidate key
    """
    config = BreakerConfig(
        candidate_keysizes=candidate_keysize_count,
        chi2_threshold=chi2_threshold,
        printable_ratio=printable_ratio_threshold,
    )
    return RepeatingKeyXORBreaker(config).break_ciphertext(ciphertext)
