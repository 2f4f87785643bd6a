"""Output formatter for cryptanalysis diagnostics"""
from typing import List

from xorbreak.models import BreakResult, SingleByteDetection


def _printable_key(key: bytes) -> str:
    return ''.join(chr(b) if 0x20 <= b <= 0x7E else '.' for b in key)


class OutputFormatter:
    """Formats pipeline results into readable text reports"""

    def format_break_report(self, result: BreakResult) -> str:
        """
        Format a BreakResult as the diagnostic report printed by the CLI.

        Lists the candidate keysizes, the key bytes recovered per keysize and
        the selected key.
        """
        lines = []
        lines.append(f"Ciphertext: {result.ciphertext_length} bytes")
        lines.append("Candidate keysizes: " + " ".join(str(c.keysize) for c in result.keysizes))
        for candidate in result.keysizes:
            lines.append(f"  {candidate}")
        lines.append("")

        for reconstruction in result.reconstructions:
            lines.append(f"Single XOR keys for keysize == {reconstruction.keysize}:")
            if reconstruction.succeeded:
                lines.append("  " + " ".join(str(b) for b in reconstruction.key))
                lines.append(f"  Key: {_printable_key(reconstruction.key)} "
                             f"(hex {reconstruction.key.hex()})")
            else:
                lines.append(f"  Could not find key (column {reconstruction.failed_column} failed)")
            lines.append("")

        lines.append(f"Best key: {_printable_key(result.key)} "
                     f"(hex {result.key.hex()}, keysize {result.keysize}, "
                     f"score {result.key_score:.2f})")
        return "\n".join(lines)

    def format_detections(self, detections: List[SingleByteDetection], max_results: int = 10) -> str:
        """Format single-byte XOR detections, best first"""
        if not detections:
            return "No single-byte XOR candidates found."

        lines = []
        lines.append(f"Single-byte XOR candidates (showing {min(max_results, len(detections))} "
                     f"of {len(detections)}):")
        lines.append("=" * 80)
        for i, detection in enumerate(detections[:max_results], 1):
            lines.append(f"{i}. Line {detection.line_number}")
            lines.append(f"   Original string (HEX): {detection.ciphertext.hex()}")
            lines.append(f"   Key (dec): {detection.key}")
            lines.append(f"   Chi^2: {detection.score:.6f}")
            lines.append(f"   Decoded: {detection.plaintext.decode('ascii', errors='replace').rstrip()}")
        return "\n".join(lines)
