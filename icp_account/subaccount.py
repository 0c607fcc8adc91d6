import logging

from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from .common import SUBACCOUNT_LENGTH, MAX_PRINCIPAL_LENGTH, is_hex
from .errors import InvalidSubaccount

if TYPE_CHECKING:
    from .principal import Principal

logger = logging.getLogger(__name__)

DEFAULT_SUBACCOUNT: bytes = bytes(SUBACCOUNT_LENGTH)


@dataclass(frozen=True)
class Subaccount:
    """
    A 32-byte sub-identifier, allowing a single principal to control several accounts.
    """
    raw: bytes = DEFAULT_SUBACCOUNT

    def __post_init__(self):
        if not isinstance(self.raw, bytes):
            raise InvalidSubaccount(f"Subaccount must be bytes, not {type(self.raw).__name__}")
        if len(self.raw) != SUBACCOUNT_LENGTH:
            raise InvalidSubaccount(
                f"Subaccount must be {SUBACCOUNT_LENGTH} bytes long, got {len(self.raw)}")

    @classmethod
    def default(cls) -> "Subaccount":
        return cls(DEFAULT_SUBACCOUNT)

    @classmethod
    def from_hex(cls, s: str) -> "Subaccount":
        """Strict parsing of a 64 characters hex string; raises InvalidSubaccount on any malformed input."""
        if not isinstance(s, str):
            raise InvalidSubaccount(f"Subaccount hex must be a string, not {type(s).__name__}")
        if len(s) != 2 * SUBACCOUNT_LENGTH:
            raise InvalidSubaccount(
                f"Subaccount hex must be {2 * SUBACCOUNT_LENGTH} characters long, got {len(s)}")
        if not is_hex(s):
            raise InvalidSubaccount(f"Subaccount is not a valid hex string: '{s}'")
        return cls(bytes.fromhex(s))

    @classmethod
    def from_index(cls, n: int) -> "Subaccount":
        """The subaccount whose bytes are the big-endian encoding of `n`."""
        if n < 0 or n >= 1 << (8 * SUBACCOUNT_LENGTH):
            raise InvalidSubaccount(f"Subaccount index out of range: {n}")
        return cls(n.to_bytes(SUBACCOUNT_LENGTH, byteorder="big"))

    @classmethod
    def from_principal(cls, principal: Union[bytes, "Principal"]) -> "Subaccount":
        """
        The subaccount conventionally reserved for `principal` in another principal's account:
        one length byte, the principal bytes, then zero padding.
        """
        raw = principal if isinstance(principal, bytes) else principal.raw
        if len(raw) > MAX_PRINCIPAL_LENGTH:
            raise InvalidSubaccount(f"Principal too long to fit in a subaccount: {len(raw)} bytes")
        return cls((len(raw).to_bytes(1, byteorder="big") + raw).ljust(SUBACCOUNT_LENGTH, b"\x00"))

    def is_default(self) -> bool:
        return self.raw == DEFAULT_SUBACCOUNT

    def hex(self) -> str:
        return self.raw.hex()

    def __str__(self) -> str:
        return self.hex()


def resolve_subaccount(subaccount_hex: Optional[str]) -> bytes:
    """
    Returns the 32 subaccount bytes to hash for `subaccount_hex`.

    The supplied bytes are only used if the string is exactly 64 valid hex characters.
    Anything else (None, wrong length, non-hex content) falls back to the all-zero
    subaccount; no error is raised.
    """
    if subaccount_hex and len(subaccount_hex) == 2 * SUBACCOUNT_LENGTH and is_hex(subaccount_hex):
        return bytes.fromhex(subaccount_hex)

    if subaccount_hex:
        logger.debug("Ignoring malformed subaccount %r, using the default subaccount", subaccount_hex)
    return DEFAULT_SUBACCOUNT
