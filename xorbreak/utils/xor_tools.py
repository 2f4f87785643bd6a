"""
XOR primitives

Provides utilities for:
- Repeating-key XOR encryption/decryption
- Fixed XOR of equal-length buffers (bytes, hex, bit strings)
- Bitwise Hamming distance
"""

from xorbreak.error_handling import InvalidArgumentError, MalformedInputError
from xorbreak.utils.codecs import ByteCodec


class XORTools:
    """XOR operations shared by the cryptanalysis pipeline"""

    @staticmethod
    def repeating_key_xor(data: bytes, key: bytes) -> bytes:
        """
        XOR data with key, repeating the key as needed.

        Encryption and decryption are the same operation.
        """
        if not key:
            raise InvalidArgumentError(
                "Repeating-key XOR requires a non-empty key",
                suggestion="Pass at least one key byte."
            )
        key_len = len(key)
        return bytes(data[i] ^ key[i % key_len] for i in range(len(data)))

    @staticmethod
    def single_byte_xor(data: bytes, key: int) -> bytes:
        """XOR every byte of data with one key byte"""
        return bytes(b ^ key for b in data)

    @staticmethod
    def fixed_xor(data1: bytes, data2: bytes) -> bytes:
        """XOR two equal-length buffers"""
        if len(data1) != len(data2):
            raise InvalidArgumentError(
                f"Fixed XOR needs equal-length inputs ({len(data1)} != {len(data2)})"
            )
        return bytes(a ^ b for a, b in zip(data1, data2))

    @staticmethod
    def xor_hex_strings(hex1: str, hex2: str) -> str:
        """XOR two equal-length hex strings"""
        result = XORTools.fixed_xor(ByteCodec.hex_to_bytes(hex1), ByteCodec.hex_to_bytes(hex2))
        return ByteCodec.bytes_to_hex(result)

    @staticmethod
    def xor_bit_strings(bits1: str, bits2: str) -> str:
        """XOR two equal-length bit strings, character by character"""
        if len(bits1) != len(bits2):
            raise InvalidArgumentError(
                f"Fixed XOR needs equal-length inputs ({len(bits1)} != {len(bits2)})"
            )
        for bits in (bits1, bits2):
            if set(bits) - {'0', '1'}:
                raise MalformedInputError(f"Bit string contains characters other than 0/1: {bits!r}")
        return ''.join('0' if a == b else '1' for a, b in zip(bits1, bits2))

    @staticmethod
    def hamming_distance(data1: bytes, data2: bytes) -> int:
        """Count of differing bits between two equal-length buffers"""
        if len(data1) != len(data2):
            raise InvalidArgumentError(
                f"Hamming distance needs equal-length inputs ({len(data1)} != {len(data2)})"
            )
        return sum(bin(x ^ y).count('1') for x, y in zip(data1, data2))
