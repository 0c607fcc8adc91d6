"""
Prints the account identifier of a principal.

Examples:
    # default subaccount
    icp-account-id 2vxsx-fae

    # explicit subaccount, rejected if it is not 64 hex characters
    icp-account-id 2vxsx-fae --subaccount 0101010101010101010101010101010101010101010101010101010101010101 --strict

    # n-th subaccount, with the hashed payload logged
    icp-account-id 2vxsx-fae --subaccount-index 5 --verbose

Setting ICP_ACCOUNT_DEBUG=1 in the environment is the same as passing --verbose.
"""

import argparse
import logging
import os
import sys

from typing import List, Optional

from .account_identifier import compute_account_identifier
from .errors import InvalidPrincipalText, InvalidSubaccount
from .principal import decode
from .subaccount import Subaccount, resolve_subaccount


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="icp-account-id", description="Derive the ledger account identifier of a principal")
    parser.add_argument("principal", type=str, help="Principal, in textual form (e.g. 2vxsx-fae)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--subaccount", type=str, default=None, help="Subaccount (64 hex characters)")
    group.add_argument("--subaccount-index", type=int, default=None, help="Use the n-th subaccount")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on a malformed subaccount instead of using the default one")
    parser.add_argument("--format", choices=["hex", "escaped"], default="hex",
                        help="Output format (default: hex)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")

    args = parser.parse_args(argv)
    if os.environ.get("ICP_ACCOUNT_DEBUG") == "1":
        args.verbose = True
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        principal_bytes = decode(args.principal)

        if args.subaccount_index is not None:
            subaccount = Subaccount.from_index(args.subaccount_index).raw
        elif args.strict and args.subaccount is not None:
            subaccount = Subaccount.from_hex(args.subaccount).raw
        else:
            subaccount = resolve_subaccount(args.subaccount)
    except (InvalidPrincipalText, InvalidSubaccount) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    account_id = compute_account_identifier(principal_bytes, subaccount, debug=args.verbose)

    if args.format == "escaped":
        print("\\".join(f"{byte:02x}" for byte in account_id))
    else:
        print(account_id.hex().upper())

    return 0


if __name__ == "__main__":
    sys.exit(main())
