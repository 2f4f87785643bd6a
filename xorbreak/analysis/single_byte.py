#!/usr/bin/env python3
"""
Single-byte XOR key search.

Brute-forces all 256 one-byte keys against a byte sequence, discards keys
whose output is mostly non-letters, and ranks the rest by Chi-square fit
against English letter frequencies.
"""

import logging
from typing import List, Optional, Iterable

from xorbreak.analysis.frequency import fit_score, is_letter_or_space
from xorbreak.config import DetectionConfig
from xorbreak.error_handling import ErrorContext, MalformedInputError
from xorbreak.models import KeyByteCandidate, SingleByteDetection
from xorbreak.utils.codecs import ByteCodec
from xorbreak.utils.xor_tools import XORTools

logger = logging.getLogger(__name__)


class SingleByteXORSearch:
    """
    Finds the single-byte XOR keys that turn data into English-like text.

    Features:
    - Exhaustive key search (0x00-0xFF)
    - Letter-or-space ratio pre-filter before scoring
    - Either every key under a Chi-square threshold or only the best fit
    """

    def __init__(self, score_threshold: float = 40.0, printable_ratio_threshold: float = 0.7):
        """
        Args:
            score_threshold: Keep keys scoring strictly below this (threshold mode)
            printable_ratio_threshold: Minimum fraction of letters/space in output
        """
        self.score_threshold = score_threshold
        self.printable_ratio_threshold = printable_ratio_threshold

    def search(self, data: bytes, only_best_fit: bool = False) -> List[KeyByteCandidate]:
        """
        Try every key byte against data.

        Args:
            data: Ciphertext bytes believed to share one key byte
            only_best_fit: Return only the lowest-scoring key

        Returns:
            Candidates in key order, or a single best candidate. Empty when no
            key passes both filters.
        """
        if not data:
            return []

        best: Optional[KeyByteCandidate] = None
        candidates = []
        length = len(data)

        for key in range(256):
            decoded = XORTools.single_byte_xor(data, key)

            letters = sum(1 for b in decoded if is_letter_or_space(b))
            if letters / length < self.printable_ratio_threshold:
                continue

            score = fit_score(decoded)

            if only_best_fit:
                if best is None or score < best.score:
                    best = KeyByteCandidate(key=key, score=score, decoded=decoded)
            elif score < self.score_threshold:
                candidates.append(KeyByteCandidate(key=key, score=score, decoded=decoded))

        if only_best_fit:
            return [best] if best is not None else []
        return candidates

    def best_fit(self, data: bytes) -> Optional[KeyByteCandidate]:
        """The lowest-scoring candidate, or None if every key was filtered out"""
        results = self.search(data, only_best_fit=True)
        return results[0] if results else None


def detect_single_byte_xor(lines: Iterable[str],
                           score_threshold: float = DetectionConfig.chi2_threshold,
                           printable_ratio_threshold: float = DetectionConfig.printable_ratio
                           ) -> List[SingleByteDetection]:
    """
    Find which hex-encoded lines were encrypted with a single-byte key.

    Args:
        lines: Hex strings, one ciphertext per entry
        score_threshold: Chi-square cut-off for a candidate to count
        printable_ratio_threshold: Minimum fraction of letters/space

    Returns:
        Every qualifying candidate across all lines, best score first

    Raises:
        MalformedInputError: If a line is not valid hex
    """
    searcher = SingleByteXORSearch(score_threshold, printable_ratio_threshold)
    detections = []

    for line_number, line in enumerate(lines, 1):
        try:
            ciphertext = ByteCodec.hex_to_bytes(line)
        except MalformedInputError as e:
            e.context = ErrorContext(function="detect_single_byte_xor", position=line_number)
            raise

        for candidate in searcher.search(ciphertext):
            logger.debug(f"Line {line_number}: key 0x{candidate.key:02X} chi2 {candidate.score:.2f}")
            detections.append(SingleByteDetection(line_number, ciphertext, candidate))

    detections.sort(key=lambda d: d.score)
    logger.info(f"Single-byte XOR detection found {len(detections)} candidates")
    return detections
