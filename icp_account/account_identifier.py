import logging

from dataclasses import dataclass
from typing import Optional, Union

from .common import (
    ACCOUNT_DOMAIN_SEPARATOR,
    ACCOUNT_IDENTIFIER_LENGTH,
    CHECKSUM_LENGTH,
    HASH224_LENGTH,
    Hash224,
    is_hex,
    sha224,
)
from .crc32 import checksum
from .errors import InvalidAccountIdentifier, InvalidSubaccount
from .principal import decode as decode_principal
from .subaccount import Subaccount, resolve_subaccount

logger = logging.getLogger(__name__)


def _subaccount_bytes(subaccount: Optional[Union[Subaccount, bytes, str]]) -> bytes:
    if subaccount is None or isinstance(subaccount, str):
        return resolve_subaccount(subaccount)
    if isinstance(subaccount, Subaccount):
        return subaccount.raw
    if isinstance(subaccount, bytes):
        return Subaccount(subaccount).raw
    raise InvalidSubaccount(f"Unsupported subaccount type: {type(subaccount).__name__}")


def compute_account_identifier(principal_bytes: bytes,
                               subaccount: bytes,
                               hash224: Hash224 = sha224,
                               debug: bool = False) -> bytes:
    """Returns the 32 raw bytes of the account identifier: checksum (4 bytes) || hash (28 bytes)"""
    payload: bytes = b"".join([
        ACCOUNT_DOMAIN_SEPARATOR,
        principal_bytes,
        subaccount
    ])

    digest: bytes = hash224(payload)
    if len(digest) != HASH224_LENGTH:
        raise ValueError(f"hash224 must return {HASH224_LENGTH} bytes, got {len(digest)}")

    check: bytes = checksum(digest)

    if debug:
        logger.info("payload:  %s", payload.hex())
        logger.info("digest:   %s", digest.hex())
        logger.info("checksum: %s", check.hex())

    return check + digest


def derive(principal_bytes: bytes,
           subaccount_hex: Optional[str] = None,
           hash224: Hash224 = sha224,
           debug: bool = False) -> str:
    """Derive the account identifier of a (principal, subaccount) pair.

    Parameters
    ----------
    principal_bytes : bytes
        Raw bytes of the owner principal, as returned by the principal decoder.
        They are used as-is.
    subaccount_hex : Optional[str]
        Hex encoding of the 32-byte subaccount. If it is missing, or it is not
        exactly 64 hex characters, the all-zero subaccount is used instead.
    hash224 : Hash224
        The SHA-224 primitive.
    debug : bool
        Log the hashed payload, the digest and the checksum.

    Returns
    -------
    str
        The 64 uppercase hex characters of the account identifier.

    """
    raw = compute_account_identifier(principal_bytes, resolve_subaccount(subaccount_hex), hash224, debug)
    return raw.hex().upper()


def principal_to_account_identifier(principal_text: str, subaccount_hex: Optional[str] = None) -> str:
    """Same as derive, starting from the textual representation of the principal.

    Raises InvalidPrincipalText if `principal_text` can't be decoded.
    """
    return derive(decode_principal(principal_text), subaccount_hex)


@dataclass(frozen=True)
class AccountIdentifier:
    """
    The address of a (principal, subaccount) pair in the ledger.
    """
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes) or len(self.raw) != ACCOUNT_IDENTIFIER_LENGTH:
            raise InvalidAccountIdentifier(
                f"Account identifier must be {ACCOUNT_IDENTIFIER_LENGTH} bytes long")

    @classmethod
    def from_principal(cls,
                       principal_bytes: bytes,
                       subaccount: Optional[Union[Subaccount, bytes, str]] = None,
                       hash224: Hash224 = sha224) -> "AccountIdentifier":
        return cls(compute_account_identifier(principal_bytes, _subaccount_bytes(subaccount), hash224))

    @classmethod
    def from_hex(cls, s: str) -> "AccountIdentifier":
        """Parses a hex-encoded account identifier (any case), verifying its checksum."""
        if not isinstance(s, str) or len(s) != 2 * ACCOUNT_IDENTIFIER_LENGTH:
            raise InvalidAccountIdentifier(
                f"Account identifier must be {2 * ACCOUNT_IDENTIFIER_LENGTH} hex characters long")
        if not is_hex(s):
            raise InvalidAccountIdentifier(f"Account identifier is not a valid hex string: '{s}'")

        raw = bytes.fromhex(s)
        if checksum(raw[CHECKSUM_LENGTH:]) != raw[:CHECKSUM_LENGTH]:
            raise InvalidAccountIdentifier(f"Checksum failed for account identifier '{s}'")

        return cls(raw)

    @property
    def checksum(self) -> bytes:
        return self.raw[:CHECKSUM_LENGTH]

    @property
    def hash(self) -> bytes:
        return self.raw[CHECKSUM_LENGTH:]

    def to_hex(self) -> str:
        return self.raw.hex().upper()

    def __str__(self) -> str:
        return self.to_hex()


def is_valid_account_identifier(s: str) -> bool:
    try:
        AccountIdentifier.from_hex(s)
    except InvalidAccountIdentifier:
        return False
    return True
