"""Tests for reading ciphertext and writing plaintext"""
import base64
import io
import textwrap

import pytest

from xorbreak.error_handling import InputError, MalformedInputError
from xorbreak.input_handler import InputHandler


@pytest.fixture
def handler():
    return InputHandler(show_stats=False)


def _wrapped_base64(data: bytes) -> str:
    return "\n".join(textwrap.wrap(base64.b64encode(data).decode('ascii'), 60)) + "\n"


class TestReading:

    def test_multiline_base64_file(self, handler, tmp_path, english_text):
        path = tmp_path / "cipher.txt"
        path.write_text(_wrapped_base64(english_text))
        assert handler.read_ciphertext_file(str(path)) == english_text

    def test_hex_file(self, handler, tmp_path):
        path = tmp_path / "cipher.hex"
        path.write_text("0001 02ff\n10\n")
        assert handler.read_ciphertext_file(str(path), 'hex') == b"\x00\x01\x02\xff\x10"

    def test_hex_argument(self, handler):
        assert handler.read_ciphertext_text("48656c6c6f") == b"Hello"

    def test_stdin(self, handler, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO("SGVsbG8=\n"))
        assert handler.read_ciphertext_stdin() == b"Hello"

    def test_stats_go_to_stderr(self, tmp_path, capsys):
        path = tmp_path / "cipher.txt"
        path.write_text("SGVsbG8=")
        InputHandler(show_stats=True).read_ciphertext_file(str(path))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Read 5 bytes" in captured.err

    def test_read_lines_skips_blanks(self, handler, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("  aa\n\nbb  \n\n")
        assert handler.read_lines(str(path)) == ["aa", "bb"]


class TestReadErrors:

    def test_missing_file(self, handler, tmp_path):
        with pytest.raises(InputError) as excinfo:
            handler.read_ciphertext_file(str(tmp_path / "missing.txt"))
        assert excinfo.value.context.path.endswith("missing.txt")
        assert excinfo.value.suggestion

    def test_directory(self, handler, tmp_path):
        with pytest.raises(InputError):
            handler.read_ciphertext_file(str(tmp_path))

    def test_empty_file(self, handler, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("  \n")
        with pytest.raises(InputError):
            handler.read_ciphertext_file(str(path))

    def test_unknown_encoding(self, handler):
        with pytest.raises(InputError) as excinfo:
            handler.decode("abcd", 'rot13')
        assert "rot13" in str(excinfo.value)

    @pytest.mark.parametrize("text,encoding", [
        ("zz", 'hex'),
        ("abc", 'hex'),
        ("SGVs*bG8=", 'base64'),
    ])
    def test_malformed(self, handler, text, encoding):
        with pytest.raises(MalformedInputError):
            handler.decode(text, encoding)


class TestWriting:

    def test_write_file(self, handler, tmp_path):
        path = tmp_path / "plain.txt"
        handler.write_output(b"secret\x00bytes", str(path))
        assert path.read_bytes() == b"secret\x00bytes"

    def test_write_stdout_adds_newline(self, handler, capsys):
        handler.write_output(b"plaintext")
        assert capsys.readouterr().out == "plaintext\n"

    def test_write_stdout_keeps_existing_newline(self, handler, capsys):
        handler.write_output(b"plaintext\n")
        assert capsys.readouterr().out == "plaintext\n"

    def test_unwritable_path(self, handler, tmp_path):
        with pytest.raises(InputError) as excinfo:
            handler.write_output(b"x", str(tmp_path / "no" / "such" / "dir.txt"))
        assert excinfo.value.original_exception is not None
