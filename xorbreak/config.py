"""Tunable parameters for the cryptanalysis pipeline"""
from dataclasses import dataclass

from xorbreak.error_handling import ConfigurationError


@dataclass(frozen=True)
class BreakerConfig:
    """
    Parameters for breaking repeating-key XOR.

    Defaults match the values the pipeline was tuned with on English
    ciphertexts of a few kilobytes.
    """
    min_keysize: int = 2
    max_keysize: int = 40
    sample_pairs: int = 8            # Adjacent block pairs per keysize
    candidate_keysizes: int = 3      # How many keysizes to try
    chi2_threshold: float = 40.0
    printable_ratio: float = 0.7

    def validate(self) -> 'BreakerConfig':
        """Raise ConfigurationError if any value is out of range."""
        if self.min_keysize < 1:
            raise ConfigurationError(f"min_keysize must be >= 1, got {self.min_keysize}")
        if self.max_keysize < self.min_keysize:
            raise ConfigurationError(
                f"max_keysize ({self.max_keysize}) must be >= min_keysize ({self.min_keysize})"
            )
        if self.sample_pairs < 1:
            raise ConfigurationError(f"sample_pairs must be >= 1, got {self.sample_pairs}")
        if self.candidate_keysizes < 1:
            raise ConfigurationError(
                f"candidate_keysizes must be >= 1, got {self.candidate_keysizes}"
            )
        if self.chi2_threshold <= 0:
            raise ConfigurationError(f"chi2_threshold must be > 0, got {self.chi2_threshold}")
        _check_ratio(self.printable_ratio)
        return self


@dataclass(frozen=True)
class DetectionConfig:
    """Parameters for finding single-byte XOR lines among many candidates"""
    chi2_threshold: float = 60.0
    printable_ratio: float = 0.8

    def validate(self) -> 'DetectionConfig':
        if self.chi2_threshold <= 0:
            raise ConfigurationError(f"chi2_threshold must be > 0, got {self.chi2_threshold}")
        _check_ratio(self.printable_ratio)
        return self


def _check_ratio(ratio: float):
    if not 0.0 <= ratio <= 1.0:
        raise ConfigurationError(
            f"printable_ratio must be between 0 and 1, got {ratio}",
            suggestion="Typical values for English text are 0.7-0.9."
        )
