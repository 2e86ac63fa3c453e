"""Cryptographic operations for edsign."""

from .keys import (
    KeyPair,
    KeyStore,
    generate_keypair,
    read_bytes,
    signing_key_from_bytes,
    verify_key_from_bytes,
)
from .signing import SIGNATURE_SIZE, sign_data, verify_signature

__all__ = [
    "KeyPair",
    "KeyStore",
    "generate_keypair",
    "read_bytes",
    "signing_key_from_bytes",
    "verify_key_from_bytes",
    "SIGNATURE_SIZE",
    "sign_data",
    "verify_signature",
]
