import hashlib
import random
import zlib

import pytest

random.seed(0)  # make sure tests are repeatable


# independent implementation, only used to cross-check the library
def reference_account_id(owner: bytes, subaccount: bytes = bytes(32)) -> str:
    hasher = hashlib.sha224()
    hasher.update(b"\x0aaccount-id")
    hasher.update(owner)
    hasher.update(subaccount)
    hash_digest = hasher.digest()  # 28 bytes

    crc32_bytes = (zlib.crc32(hash_digest) & 0xFFFFFFFF).to_bytes(4, byteorder="big")

    return (crc32_bytes + hash_digest).hex().upper()


@pytest.fixture
def reference():
    return reference_account_id


@pytest.fixture
def anonymous_bytes() -> bytes:
    return b"\x04"


# principal of the ICP ledger canister
@pytest.fixture
def ledger_canister_text() -> str:
    return "ryjl3-tyaaa-aaaaa-aaaba-cai"


@pytest.fixture
def ledger_canister_bytes() -> bytes:
    return bytes.fromhex("00000000000000020101")


@pytest.fixture
def random_principals():
    return [bytes(random.getrandbits(8) for _ in range(n)) for n in [0, 1, 10, 29]]
