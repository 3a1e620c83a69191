# fandom_oracle/keys/__init__.py
"""
Ephemeral Ed25519 enclave key.

The keypair is generated once per process start and lives only in memory.
It is never written to disk or exported; consumers pin the public key
reported by /health_check (and bound into the attestation document by the
outer enclave runtime).
"""

from nacl.encoding import HexEncoder
from nacl.signing import SigningKey, VerifyKey


def generate_enclave_key() -> SigningKey:
    """Generate a fresh keypair for this boot session."""
    return SigningKey.generate()


def public_key_hex(sk: SigningKey) -> str:
    return sk.verify_key.encode(HexEncoder).decode()


def load_verify_key(pk_hex: str) -> VerifyKey:
    return VerifyKey(bytes.fromhex(pk_hex))
