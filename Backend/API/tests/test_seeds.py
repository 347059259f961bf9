import hashlib
import re

import pytest

from conftest import CLIENT_SEED, COMBINED_SEED, COMMIT_HEX, NONCE, SERVER_SEED
from services import seeds
from services.errors import HashMismatch, InvalidSeedFormat


def test_commitment_matches_vector():
    assert seeds.create_commitment(SERVER_SEED, NONCE) == COMMIT_HEX


def test_combined_seed_matches_vector():
    assert seeds.generate_combined_seed(SERVER_SEED, CLIENT_SEED, NONCE) == COMBINED_SEED


def test_combined_seed_is_hash_of_framed_string():
    framed = "s3rv3r:cl1ent:n0nce"
    expected = hashlib.sha256(framed.encode("utf-8")).hexdigest()
    assert seeds.generate_combined_seed("s3rv3r", "cl1ent", "n0nce") == expected
    assert seeds.generate_combined_seed("s3rv3r", "cl1ent", "n0nce") == expected


def test_server_seed_is_64_hex_and_fresh():
    a, b = seeds.generate_server_seed(), seeds.generate_server_seed()
    assert re.fullmatch(r"[0-9a-f]{64}", a)
    assert a != b


def test_nonces_are_unique():
    nonces = {seeds.generate_nonce() for _ in range(200)}
    assert len(nonces) == 200


def test_verify_commitment_roundtrip():
    seed, nonce = seeds.generate_server_seed(), seeds.generate_nonce()
    commitment = seeds.create_commitment(seed, nonce)
    assert seeds.verify_commitment(seed, nonce, commitment)
    altered = ("1" if seed[0] == "0" else "0") + seed[1:]
    assert not seeds.verify_commitment(altered, nonce, commitment)
    assert not seeds.verify_commitment(seed, nonce + "x", commitment)


@pytest.mark.parametrize("bad", ["invalid-hash", "", "ñ" * 64, None, 123])
def test_verify_commitment_never_raises(bad):
    assert seeds.verify_commitment(SERVER_SEED, NONCE, bad) is False


def test_verify_commitment_is_case_sensitive():
    assert seeds.verify_commitment(SERVER_SEED, NONCE, COMMIT_HEX)
    assert not seeds.verify_commitment(SERVER_SEED, NONCE, COMMIT_HEX.upper())


def test_ensure_commitment_raises_on_mismatch():
    seeds.ensure_commitment(SERVER_SEED, NONCE, COMMIT_HEX)
    with pytest.raises(HashMismatch):
        seeds.ensure_commitment(SERVER_SEED, "43", COMMIT_HEX)


@pytest.mark.parametrize("field", ["server", "client", "nonce"])
def test_single_char_change_avalanches(field):
    args = {"server": SERVER_SEED, "client": CLIENT_SEED, "nonce": NONCE}
    args[field] = args[field][:-1] + ("X" if args[field][-1] != "X" else "Y")
    other = seeds.generate_combined_seed(args["server"], args["client"], args["nonce"])
    assert other != COMBINED_SEED
    differing = sum(a != b for a, b in zip(other, COMBINED_SEED))
    assert differing > 32


def test_extract_prng_seed_big_endian():
    assert seeds.extract_prng_seed(COMBINED_SEED) == 0xE1DDDF77
    assert seeds.extract_prng_seed("00000001") == 1
    assert seeds.extract_prng_seed("FFFFFFFFzz") == 0xFFFFFFFF


@pytest.mark.parametrize("bad", ["", "abc", "1234567", "e1dd df77", "0x1234ab", "ghijklmn", None])
def test_extract_prng_seed_rejects_malformed(bad):
    with pytest.raises(InvalidSeedFormat):
        seeds.extract_prng_seed(bad)
