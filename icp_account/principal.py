"""principal module.

Textual encoding of principals: the CRC-32 checksum of the raw bytes is prepended,
the result is base32-encoded (RFC 4648 alphabet, lowercase, no padding) and split
in groups of 5 characters separated by dashes.

    b"\\x04"  <->  "2vxsx-fae"
    b""      <->  "aaaaa-aa"
"""

import base64
import binascii

from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from ecdsa.curves import SECP256k1
from ecdsa.keys import VerifyingKey, MalformedPointError

from .common import MAX_PRINCIPAL_LENGTH, sha224
from .crc32 import checksum
from .errors import InvalidPrincipalText
from .subaccount import Subaccount

if TYPE_CHECKING:
    from .account_identifier import AccountIdentifier


b32_digits: str = 'abcdefghijklmnopqrstuvwxyz234567'

GROUP_LENGTH: int = 5

# trailing byte of the raw representation, by kind of principal
SELF_AUTHENTICATING_TAG: int = 0x02
ANONYMOUS_TAG: int = 0x04

# DER SubjectPublicKeyInfo prefix of a raw 32-byte Ed25519 public key
ED25519_DER_PREFIX: bytes = bytes.fromhex("302a300506032b6570032100")


def encode(b: bytes) -> str:
    """Encode the raw bytes of a principal to its textual representation"""
    if len(b) > MAX_PRINCIPAL_LENGTH:
        raise InvalidPrincipalText(
            f"Principal is {len(b)} bytes long, the maximum is {MAX_PRINCIPAL_LENGTH}")

    res = base64.b32encode(checksum(b) + b).decode("ascii").lower().rstrip("=")

    return "-".join(res[i:i + GROUP_LENGTH] for i in range(0, len(res), GROUP_LENGTH))


def decode(s: str) -> bytes:
    """Decode the textual representation of a principal, returning its raw bytes"""
    if not isinstance(s, str):
        raise InvalidPrincipalText(f"Principal text must be a string, not {type(s).__name__}")

    groups = s.split("-")
    for group in groups:
        if not group or len(group) > GROUP_LENGTH:
            raise InvalidPrincipalText(f"Invalid grouping in principal text: '{s}'")
        for c in group:
            if c not in b32_digits:
                raise InvalidPrincipalText(f"Character {c!r} is not a valid principal character")

    cleaned = "".join(groups).upper()
    # b32decode requires padding to a multiple of 8 characters
    padding = "=" * ((8 - len(cleaned) % 8) % 8)
    try:
        decoded = base64.b32decode(cleaned + padding)
    except binascii.Error as e:
        raise InvalidPrincipalText(f"Principal text is not valid base32: '{s}'") from e

    if len(decoded) < 4:
        raise InvalidPrincipalText(f"Principal text is too short to have a checksum: '{s}'")

    check, result = decoded[:4], decoded[4:]

    if len(result) > MAX_PRINCIPAL_LENGTH:
        raise InvalidPrincipalText(
            f"Principal is {len(result)} bytes long, the maximum is {MAX_PRINCIPAL_LENGTH}")

    if checksum(result) != check:
        raise InvalidPrincipalText(f"Checksum failed for principal '{s}'")

    if encode(result) != s:
        raise InvalidPrincipalText(f"Principal text is not in canonical form: '{s}'")

    return result


@dataclass(frozen=True)
class Principal:
    """
    An opaque identity, used to address the owner of an account.
    """
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes):
            raise TypeError(f"Principal must be bytes, not {type(self.raw).__name__}")
        if len(self.raw) > MAX_PRINCIPAL_LENGTH:
            raise InvalidPrincipalText(
                f"Principal is {len(self.raw)} bytes long, the maximum is {MAX_PRINCIPAL_LENGTH}")

    @classmethod
    def from_text(cls, s: str) -> "Principal":
        return cls(decode(s))

    @classmethod
    def from_hex(cls, s: str) -> "Principal":
        try:
            return cls(bytes.fromhex(s))
        except ValueError as e:
            if isinstance(e, InvalidPrincipalText):
                raise
            raise InvalidPrincipalText(f"Principal is not a valid hex string: '{s}'") from e

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(bytes([ANONYMOUS_TAG]))

    @classmethod
    def management_canister(cls) -> "Principal":
        return cls(b"")

    @classmethod
    def self_authenticating(cls, der_public_key: bytes) -> "Principal":
        """The principal controlled by the holder of the DER-encoded public key."""
        return cls(sha224(der_public_key) + bytes([SELF_AUTHENTICATING_TAG]))

    @classmethod
    def from_secp256k1_public_key(cls, pubkey: bytes) -> "Principal":
        """
        Self-authenticating principal of a secp256k1 public key, given as a compressed (33 bytes),
        uncompressed (65 bytes) or raw (64 bytes) SEC1 point.
        """
        try:
            vk = VerifyingKey.from_string(pubkey, curve=SECP256k1)
        except MalformedPointError as e:
            raise ValueError(f"Invalid secp256k1 public key: {pubkey.hex()}") from e
        return cls.self_authenticating(vk.to_der())

    @classmethod
    def from_ed25519_public_key(cls, pubkey: bytes) -> "Principal":
        if len(pubkey) != 32:
            raise ValueError(f"Ed25519 public key must be 32 bytes long, got {len(pubkey)}")
        return cls.self_authenticating(ED25519_DER_PREFIX + pubkey)

    def is_anonymous(self) -> bool:
        return self.raw == bytes([ANONYMOUS_TAG])

    def is_self_authenticating(self) -> bool:
        return len(self.raw) == MAX_PRINCIPAL_LENGTH and self.raw[-1] == SELF_AUTHENTICATING_TAG

    def to_text(self) -> str:
        return encode(self.raw)

    def account_identifier(self, subaccount: Optional[Union[Subaccount, bytes, str]] = None) -> "AccountIdentifier":
        from .account_identifier import AccountIdentifier

        return AccountIdentifier.from_principal(self.raw, subaccount)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Principal({self.to_text()!r})"
