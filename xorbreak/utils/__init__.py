"""Byte codec and XOR primitives"""

from .codecs import ByteCodec
from .xor_tools import XORTools

__all__ = ['ByteCodec', 'XORTools']
