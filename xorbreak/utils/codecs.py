"""
Byte codec utilities

Converts between raw bytes and their textual forms:
- Hexadecimal
- Base64
- Bit strings ('0'/'1')

Malformed input is rejected with MalformedInputError rather than skipped,
so corrupted ciphertext never reaches the statistical pipeline silently.
Whitespace is ignored in hex and Base64 input so multi-line files decode.
"""

import base64
import binascii
import string

from xorbreak.error_handling import MalformedInputError


_HEX_DIGITS = frozenset(string.hexdigits)
_BASE64_ALPHABET = frozenset(string.ascii_letters + string.digits + '+/=')


def _strip_whitespace(text: str) -> str:
    return ''.join(text.split())


class ByteCodec:
    """Conversions between bytes and hex, Base64 and bit strings"""

    @staticmethod
    def hex_to_bytes(hex_string: str) -> bytes:
        """Hex to bytes, ignoring whitespace"""
        cleaned = _strip_whitespace(hex_string)
        for position, char in enumerate(cleaned):
            if char not in _HEX_DIGITS:
                raise MalformedInputError(
                    f"Invalid hex character {char!r} at position {position}"
                )
        if len(cleaned) % 2:
            raise MalformedInputError(
                f"Hex string has odd length ({len(cleaned)} digits)"
            )
        return bytes.fromhex(cleaned)

    @staticmethod
    def bytes_to_hex(data: bytes) -> str:
        """Bytes to lowercase hex"""
        return data.hex()

    @staticmethod
    def base64_to_bytes(b64_string: str) -> bytes:
        """Base64 to bytes, ignoring whitespace and line breaks"""
        cleaned = _strip_whitespace(b64_string)
        for position, char in enumerate(cleaned):
            if char not in _BASE64_ALPHABET:
                raise MalformedInputError(
                    f"Invalid Base64 character {char!r} at position {position}"
                )
        try:
            return base64.b64decode(cleaned, validate=True)
        except binascii.Error as e:
            raise MalformedInputError(
                f"Invalid Base64 data: {e}", original_exception=e
            ) from e

    @staticmethod
    def bytes_to_base64(data: bytes) -> str:
        """Bytes to padded Base64"""
        return base64.b64encode(data).decode('ascii')

    @staticmethod
    def bytes_to_bits(data: bytes) -> str:
        """Bytes to a string of '0'/'1', eight characters per byte"""
        return ''.join(f'{b:08b}' for b in data)

    @staticmethod
    def bits_to_bytes(bit_string: str) -> bytes:
        """Bit string to bytes; length must be a multiple of 8"""
        for position, char in enumerate(bit_string):
            if char not in '01':
                raise MalformedInputError(
                    f"Invalid bit character {char!r} at position {position}"
                )
        if len(bit_string) % 8:
            raise MalformedInputError(
                f"Bit string length {len(bit_string)} is not a multiple of 8"
            )
        return bytes(int(bit_string[i:i+8], 2) for i in range(0, len(bit_string), 8))

    @staticmethod
    def hex_to_base64(hex_string: str) -> str:
        """Re-encode a hex string as Base64"""
        return ByteCodec.bytes_to_base64(ByteCodec.hex_to_bytes(hex_string))
