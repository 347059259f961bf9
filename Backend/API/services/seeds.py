"""Commit-reveal seed material for provably fair rounds.

commitment   = sha256(server_seed + ":" + nonce)
combined     = sha256(server_seed + ":" + client_seed + ":" + nonce)
"""
import hashlib, hmac, secrets, string, time

from services.errors import HashMismatch, InvalidSeedFormat

PRNG_SEED_HEX_CHARS = 8


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def generate_server_seed() -> str:
    return secrets.token_hex(32)  # 64 hex chars


def generate_nonce() -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def create_commitment(server_seed: str, nonce: str) -> str:
    return _sha256_hex(f"{server_seed}:{nonce}")


def generate_combined_seed(server_seed: str, client_seed: str, nonce: str) -> str:
    return _sha256_hex(f"{server_seed}:{client_seed}:{nonce}")


def verify_commitment(server_seed: str, nonce: str, commitment: str) -> bool:
    if not all(isinstance(v, str) for v in (server_seed, nonce, commitment)):
        return False
    expected = create_commitment(server_seed, nonce)
    # commitments are lowercase hex; compare exactly
    return hmac.compare_digest(expected.encode(), commitment.encode("utf-8", "replace"))


def ensure_commitment(server_seed: str, nonce: str, commitment: str) -> None:
    if not verify_commitment(server_seed, nonce, commitment):
        raise HashMismatch(f"server seed does not match commitment {commitment!r}")


def extract_prng_seed(hex_seed: str) -> int:
    """First 8 hex chars of the combined seed as an unsigned 32-bit big-endian int."""
    head = hex_seed[:PRNG_SEED_HEX_CHARS] if isinstance(hex_seed, str) else ""
    if len(head) < PRNG_SEED_HEX_CHARS:
        raise InvalidSeedFormat(f"need at least {PRNG_SEED_HEX_CHARS} hex chars, got {hex_seed!r}")
    if any(c not in string.hexdigits for c in head):
        raise InvalidSeedFormat(f"non-hex seed prefix {head!r}")
    return int.from_bytes(bytes.fromhex(head), "big")
