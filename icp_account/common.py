from typing import Callable

import hashlib

SUBACCOUNT_LENGTH: int = 32
HASH224_LENGTH: int = 28
CHECKSUM_LENGTH: int = 4
ACCOUNT_IDENTIFIER_LENGTH: int = CHECKSUM_LENGTH + HASH224_LENGTH
MAX_PRINCIPAL_LENGTH: int = 29

# the hash primitive is swappable, but must produce standard SHA-224 output
Hash224 = Callable[[bytes], bytes]


def serialize_str(value: str) -> bytes:
    return len(value).to_bytes(1, byteorder="big") + value.encode("latin-1")


ACCOUNT_DOMAIN_SEPARATOR: bytes = serialize_str("account-id")


def sha224(s: bytes) -> bytes:
    return hashlib.new('sha224', s).digest()


def is_hex(s: str) -> bool:
    """True if `s` is a non-empty string of hexadecimal digits, with an even length"""
    if not s or len(s) % 2:
        return False
    try:
        bytes.fromhex(s)
    except ValueError:
        return False
    # bytes.fromhex skips whitespace between bytes
    return not any(c.isspace() for c in s)
