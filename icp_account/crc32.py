"""CRC-32 checksum, as prefixed to account identifiers and principal texts.

Reflected CRC-32 (ISO HDLC / IEEE 802.3): polynomial 0xEDB88320, initial value
0xFFFFFFFF, final xor 0xFFFFFFFF. The output is the same as zlib.crc32.
"""

from typing import Tuple

CRC32_POLYNOMIAL: int = 0xEDB88320
CRC32_INIT: int = 0xFFFFFFFF


def make_table(poly: int = CRC32_POLYNOMIAL) -> Tuple[int, ...]:
    """Builds the 256-entry lookup table for the reflected polynomial `poly`"""
    table = []
    for i in range(256):
        c = i
        for _ in range(8):
            if c & 1:
                c = (c >> 1) ^ poly
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


# built once at import, never mutated afterwards
CRC32_TABLE: Tuple[int, ...] = make_table()


def crc32(data: bytes) -> int:
    c = CRC32_INIT
    for byte in data:
        c = CRC32_TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c ^ 0xFFFFFFFF


def checksum(data: bytes) -> bytes:
    """Calculate the 4-byte big-endian CRC-32 checksum of `data`"""
    return crc32(data).to_bytes(4, byteorder="big")
