"""Input handler for reading ciphertext from files, arguments or stdin"""
import sys
from pathlib import Path
from typing import List, Optional

from xorbreak.error_handling import ErrorContext, InputError, create_error
from xorbreak.utils.codecs import ByteCodec

ENCODINGS = ('base64', 'hex')


class InputHandler:
    """Reads ciphertext and writes recovered plaintext"""

    def __init__(self, show_stats: bool = True):
        """
        Args:
            show_stats: Print a short summary of what was read to stderr
        """
        self.show_stats = show_stats

    def _read_text(self, filepath: str) -> str:
        path = Path(filepath)
        context = ErrorContext(function="read", path=filepath)

        if not path.exists():
            raise create_error("file_not_found", error_class=InputError, context=context, path=filepath)

        if not path.is_file():
            raise create_error("not_a_file", error_class=InputError, context=context, path=filepath)

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read file: {filepath}", context=context,
                             original_exception=e) from e

        if not content.strip():
            raise create_error("empty_input", error_class=InputError, context=context)

        return content

    def decode(self, text: str, encoding: str = 'base64') -> bytes:
        """
        Decode ciphertext text in the given encoding.

        Raises:
            InputError: If the encoding is unknown or the text is empty
            MalformedInputError: If the text is not valid for the encoding
        """
        if encoding not in ENCODINGS:
            raise create_error("unknown_encoding", error_class=InputError, encoding=encoding)
        if not text.strip():
            raise create_error("empty_input", error_class=InputError)

        if encoding == 'hex':
            return ByteCodec.hex_to_bytes(text)
        return ByteCodec.base64_to_bytes(text)

    def read_ciphertext_file(self, filepath: str, encoding: str = 'base64') -> bytes:
        """
        Read a ciphertext file.

        Base64 files may be split over many lines; the lines are joined
        before decoding. Hex files may contain whitespace.
        """
        data = self.decode(self._read_text(filepath), encoding)
        if self.show_stats:
            print(f"✓ Read {len(data)} bytes of ciphertext from {filepath}", file=sys.stderr)
        return data

    def read_ciphertext_text(self, text: str, encoding: str = 'hex') -> bytes:
        """Decode ciphertext passed as an argument"""
        return self.decode(text, encoding)

    def read_ciphertext_stdin(self, encoding: str = 'base64') -> bytes:
        """Decode ciphertext piped on stdin"""
        if self.show_stats:
            print("📥 Reading from stdin...", file=sys.stderr)
        data = self.decode(sys.stdin.read(), encoding)
        if self.show_stats:
            print(f"✓ Read {len(data)} bytes of ciphertext from stdin", file=sys.stderr)
        return data

    def read_lines(self, filepath: str) -> List[str]:
        """Non-empty, stripped lines of a text file"""
        lines = [line.strip() for line in self._read_text(filepath).splitlines()]
        return [line for line in lines if line]

    def write_output(self, data: bytes, output_path: Optional[str] = None):
        """
        Write recovered plaintext to a file, or to stdout.

        Raises:
            InputError: If the output file cannot be written
        """
        if output_path:
            try:
                Path(output_path).write_bytes(data)
            except OSError as e:
                error = create_error("write_failed", error_class=InputError,
                                     context=ErrorContext(function="write_output", path=output_path),
                                     path=output_path)
                error.original_exception = e
                raise error from e
            if self.show_stats:
                print(f"✓ Output written to {output_path}", file=sys.stderr)
        else:
            sys.stdout.write(data.decode('utf-8', errors='replace'))
            if not data.endswith(b'\n'):
                sys.stdout.write('\n')
            sys.stdout.flush()
