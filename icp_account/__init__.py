"""Account identifiers of Internet Computer ledger accounts"""

from .account_identifier import (
    AccountIdentifier,
    derive,
    principal_to_account_identifier,
    is_valid_account_identifier,
)
from .crc32 import checksum
from .errors import InvalidPrincipalText, InvalidSubaccount, InvalidAccountIdentifier
from .principal import Principal
from .subaccount import Subaccount

__version__ = '0.1.0'

__all__ = [
    "AccountIdentifier",
    "derive",
    "principal_to_account_identifier",
    "is_valid_account_identifier",
    "checksum",
    "InvalidPrincipalText",
    "InvalidSubaccount",
    "InvalidAccountIdentifier",
    "Principal",
    "Subaccount",
]
