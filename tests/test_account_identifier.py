import logging
import re

import pytest

from icp_account import (
    AccountIdentifier,
    InvalidAccountIdentifier,
    InvalidPrincipalText,
    InvalidSubaccount,
    Principal,
    Subaccount,
    derive,
    is_valid_account_identifier,
    principal_to_account_identifier,
)
from icp_account.crc32 import checksum

ACCOUNT_ID_RE = re.compile(r"^[0-9A-F]{64}$")


def test_derive_matches_reference(reference, anonymous_bytes, ledger_canister_bytes, random_principals):
    for p in [anonymous_bytes, ledger_canister_bytes, *random_principals]:
        assert derive(p) == reference(p)
        assert derive(p, "01" * 32) == reference(p, b"\x01" * 32)


def test_derive_deterministic(anonymous_bytes):
    results = {derive(anonymous_bytes) for _ in range(10)}
    assert len(results) == 1


def test_derive_format(random_principals):
    for p in random_principals:
        for sub in [None, "00" * 32, "ff" * 32, "0123456789"]:
            assert ACCOUNT_ID_RE.match(derive(p, sub))


def test_derive_default_subaccount(random_principals):
    for p in random_principals:
        assert derive(p) == derive(p, "0" * 64)
        assert derive(p, None) == derive(p, "00" * 32)


def test_derive_anonymous(anonymous_bytes):
    default = derive(anonymous_bytes)
    assert default == derive(anonymous_bytes)
    assert default != derive(anonymous_bytes, "01" * 32)


def test_derive_malformed_subaccount_length(anonymous_bytes):
    assert derive(anonymous_bytes, "0123456789") == derive(anonymous_bytes)
    assert derive(anonymous_bytes, "01" * 33) == derive(anonymous_bytes)


def test_derive_non_hex_subaccount(anonymous_bytes):
    assert derive(anonymous_bytes, "zz" * 32) == derive(anonymous_bytes)


def test_derive_subaccount_case_insensitive(anonymous_bytes):
    assert derive(anonymous_bytes, "ab" * 32) == derive(anonymous_bytes, "AB" * 32)


def test_derive_sensitivity(ledger_canister_bytes):
    base = derive(ledger_canister_bytes)

    for i in range(len(ledger_canister_bytes)):
        for bit in [0, 7]:
            flipped = bytearray(ledger_canister_bytes)
            flipped[i] ^= 1 << bit
            assert derive(bytes(flipped)) != base

    for i in range(32):
        sub = bytearray(32)
        sub[i] = 1
        assert derive(ledger_canister_bytes, sub.hex()) != base


def test_derive_checksum_prefix(anonymous_bytes):
    raw = bytes.fromhex(derive(anonymous_bytes))
    assert len(raw) == 32
    assert raw[:4] == checksum(raw[4:])


def test_derive_custom_hash(anonymous_bytes):
    payloads = []

    def fake_hash224(payload: bytes) -> bytes:
        payloads.append(payload)
        return bytes(range(28))

    result = derive(anonymous_bytes, "01" * 32, hash224=fake_hash224)

    assert payloads == [b"\x0aaccount-id" + anonymous_bytes + b"\x01" * 32]
    assert result == (checksum(bytes(range(28))) + bytes(range(28))).hex().upper()


def test_derive_custom_hash_wrong_length(anonymous_bytes):
    with pytest.raises(ValueError):
        derive(anonymous_bytes, hash224=lambda payload: bytes(32))


def test_derive_debug_logging(anonymous_bytes, caplog):
    caplog.set_level(logging.INFO, logger="icp_account.account_identifier")

    derive(anonymous_bytes)
    assert "payload" not in caplog.text

    derive(anonymous_bytes, debug=True)
    assert ("payload:  0a6163636f756e742d696404" + "00" * 32) in caplog.text
    assert "digest:" in caplog.text
    assert "checksum:" in caplog.text


def test_principal_to_account_identifier(reference, ledger_canister_text, ledger_canister_bytes):
    assert principal_to_account_identifier("2vxsx-fae") == reference(b"\x04")
    assert principal_to_account_identifier(ledger_canister_text, "01" * 32) == \
        reference(ledger_canister_bytes, b"\x01" * 32)
    assert principal_to_account_identifier("2vxsx-fae", "0123456789") == reference(b"\x04")

    with pytest.raises(InvalidPrincipalText):
        principal_to_account_identifier("2vxsx-faf")


def test_account_identifier_value(anonymous_bytes):
    account_id = AccountIdentifier.from_principal(anonymous_bytes)

    assert account_id.to_hex() == derive(anonymous_bytes)
    assert str(account_id) == account_id.to_hex()
    assert len(account_id.checksum) == 4
    assert len(account_id.hash) == 28
    assert account_id.checksum == checksum(account_id.hash)


def test_account_identifier_from_principal_subaccounts(anonymous_bytes):
    expected = derive(anonymous_bytes, "00" * 31 + "01")

    assert AccountIdentifier.from_principal(anonymous_bytes, Subaccount.from_index(1)).to_hex() == expected
    assert AccountIdentifier.from_principal(anonymous_bytes, bytes(31) + b"\x01").to_hex() == expected
    assert AccountIdentifier.from_principal(anonymous_bytes, "00" * 31 + "01").to_hex() == expected
    assert AccountIdentifier.from_principal(anonymous_bytes, "bad").to_hex() == derive(anonymous_bytes)

    with pytest.raises(InvalidSubaccount):
        AccountIdentifier.from_principal(anonymous_bytes, bytes(31))
    with pytest.raises(InvalidSubaccount):
        AccountIdentifier.from_principal(anonymous_bytes, 1)


def test_principal_account_identifier():
    p = Principal.anonymous()
    assert p.account_identifier() == AccountIdentifier.from_principal(b"\x04")
    assert p.account_identifier(Subaccount.from_index(7)).to_hex() == derive(b"\x04", "00" * 31 + "07")


def test_account_identifier_from_hex(anonymous_bytes):
    s = derive(anonymous_bytes)

    account_id = AccountIdentifier.from_hex(s)
    assert account_id.to_hex() == s
    assert AccountIdentifier.from_hex(s.lower()) == account_id
    assert is_valid_account_identifier(s)


@pytest.mark.parametrize("s", [
    "",
    "00" * 31,
    "00" * 33,
    "zz" * 32,
])
def test_account_identifier_from_hex_invalid(s):
    with pytest.raises(InvalidAccountIdentifier):
        AccountIdentifier.from_hex(s)
    assert not is_valid_account_identifier(s)


def test_account_identifier_from_hex_bad_checksum(anonymous_bytes):
    s = derive(anonymous_bytes)
    corrupted = s[:-1] + ("0" if s[-1] != "0" else "1")

    with pytest.raises(InvalidAccountIdentifier):
        AccountIdentifier.from_hex(corrupted)
    assert not is_valid_account_identifier(corrupted)


def test_account_identifier_wrong_length():
    with pytest.raises(InvalidAccountIdentifier):
        AccountIdentifier(bytes(31))
