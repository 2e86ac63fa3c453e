"""Ed25519 signing and verification of raw bytes."""

import nacl.signing
import nacl.exceptions

SIGNATURE_SIZE = 64


def sign_data(data: bytes, private_key: nacl.signing.SigningKey) -> bytes:
    """
    Sign data with Ed25519 private key.

    Args:
        data: Data to sign
        private_key: Ed25519 private key

    Returns:
        Detached 64-byte signature
    """
    signed = private_key.sign(data)
    # Only the signature, not signature + message
    return signed.signature


def verify_signature(
    data: bytes,
    signature: bytes,
    public_key: nacl.signing.VerifyKey
) -> bool:
    """
    Verify Ed25519 signature.

    Args:
        data: Original data that was signed
        signature: Detached signature bytes
        public_key: Ed25519 public key

    Returns:
        True if signature is valid, False otherwise
    """
    try:
        public_key.verify(data, signature)
        return True
    except (nacl.exceptions.BadSignatureError, ValueError):
        return False
