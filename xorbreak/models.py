"""Core data models for xorbreak"""
from dataclasses import dataclass, field
from typing import Optional, List


def _preview(data: bytes, limit: int = 50) -> str:
    """Render the start of a byte sequence for reports"""
    return data[:limit].decode('ascii', errors='replace').replace('\n', '\\n')


@dataclass(frozen=True)
class KeyByteCandidate:
    """One single-byte XOR key with its fit score and decoded output"""
    key: int                         # Key byte (0-255)
    score: float                     # Chi-square fit score, lower is better
    decoded: bytes                   # Input XORed with key

    def __str__(self) -> str:
        return (f"Key: 0x{self.key:02X} | Chi2: {self.score:.2f} | "
                f"Preview: {_preview(self.decoded)}")


@dataclass(frozen=True)
class KeysizeCandidate:
    """A candidate repeating-key length and its normalized Hamming distance"""
    keysize: int
    distance: float
    pairs: int = 0                   # Block pairs actually sampled

    def __str__(self) -> str:
        return f"Keysize: {self.keysize:>3} | Distance: {self.distance:.4f}"


@dataclass(frozen=True)
class KeyReconstruction:
    """
    Outcome of recovering a full key for one keysize.

    On success ``key`` holds one byte per column. On failure ``key`` is empty
    and ``failed_column`` names the first column without a candidate.
    """
    keysize: int
    key: bytes = b""
    failed_column: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.failed_column is None and len(self.key) == self.keysize

    @classmethod
    def failure(cls, keysize: int, column: int) -> 'KeyReconstruction':
        return cls(keysize=keysize, key=b"", failed_column=column)

    def __str__(self) -> str:
        if not self.succeeded:
            return f"Keysize {self.keysize}: no key (column {self.failed_column} failed)"
        return f"Keysize {self.keysize}: {self.key.hex()} ({_preview(self.key)})"


@dataclass
class BreakResult:
    """Everything the pipeline learned while breaking one ciphertext"""
    keysizes: List[KeysizeCandidate]
    reconstructions: List[KeyReconstruction]
    key: bytes
    key_score: float
    plaintext: bytes
    ciphertext_length: int = 0

    @property
    def keysize(self) -> int:
        return len(self.key)

    @property
    def successful_keys(self) -> List[bytes]:
        return [r.key for r in self.reconstructions if r.succeeded]


@dataclass(frozen=True)
class SingleByteDetection:
    """A ciphertext line that decodes to English under a single-byte key"""
    line_number: int                 # 1-based line index in the input
    ciphertext: bytes
    candidate: KeyByteCandidate = field(compare=False)

    @property
    def key(self) -> int:
        return self.candidate.key

    @property
    def score(self) -> float:
        return self.candidate.score

    @property
    def plaintext(self) -> bytes:
        return self.candidate.decoded

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.candidate}"
