"""Tests for report formatting"""
import math

from xorbreak.formatter import OutputFormatter
from xorbreak.models import (
    BreakResult,
    KeyByteCandidate,
    KeyReconstruction,
    KeysizeCandidate,
    SingleByteDetection,
)


def _result():
    return BreakResult(
        keysizes=[KeysizeCandidate(3, 2.5, pairs=8), KeysizeCandidate(7, 3.1, pairs=8)],
        reconstructions=[
            KeyReconstruction(3, b"ICE"),
            KeyReconstruction.failure(7, 4),
        ],
        key=b"ICE",
        key_score=math.inf,
        plaintext=b"Burning 'em",
        ciphertext_length=11,
    )


def test_break_report():
    report = OutputFormatter().format_break_report(_result())
    assert "Candidate keysizes: 3 7" in report
    assert "Single XOR keys for keysize == 3:" in report
    assert "  73 67 69" in report
    assert "Key: ICE (hex 494345)" in report
    assert "Could not find key (column 4 failed)" in report
    assert "Best key: ICE (hex 494345, keysize 3, score inf)" in report


def test_unprintable_key_bytes_masked():
    result = _result()
    result.key = b"\x00A\xff"
    assert "Best key: .A. " in OutputFormatter().format_break_report(result)


def test_no_detections():
    assert OutputFormatter().format_detections([]) == "No single-byte XOR candidates found."


def test_detections_limited():
    detections = [
        SingleByteDetection(n, b"\x01", KeyByteCandidate(0x41, float(n), b"hello"))
        for n in range(1, 6)
    ]
    text = OutputFormatter().format_detections(detections, max_results=2)
    assert "showing 2 of 5" in text
    assert "2. Line 2" in text
    assert "Line 3" not in text
    assert "Key (dec): 65" in text
    assert "Decoded: hello" in text


def test_reconstruction_str():
    assert str(KeyReconstruction(3, b"ICE")) == "Keysize 3: 494345 (ICE)"
    assert not KeyReconstruction.failure(5, 0).succeeded
