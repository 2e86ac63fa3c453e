"""Key generation and on-disk key storage for Ed25519."""

import base64
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import nacl.signing
import nacl.exceptions

from ..config import EdSignConfig
from ..errors import FormatError, KeyExistsError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
SECRET_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE

PathLike = Union[str, os.PathLike]


@dataclass
class KeyPair:
    """Ed25519 key pair."""
    private_key: nacl.signing.SigningKey
    public_key: nacl.signing.VerifyKey

    @property
    def private_key_bytes(self) -> bytes:
        """Raw 64-byte secret key: seed followed by public key."""
        return bytes(self.private_key) + bytes(self.public_key)

    @property
    def public_key_bytes(self) -> bytes:
        return bytes(self.public_key)

    @property
    def public_key_b64(self) -> str:
        """Get base64-encoded public key."""
        return base64.b64encode(self.public_key_bytes).decode('utf-8')


def generate_keypair() -> KeyPair:
    """
    Generate a new Ed25519 key pair.

    Returns:
        KeyPair: New cryptographic key pair
    """
    private_key = nacl.signing.SigningKey.generate()
    return KeyPair(private_key=private_key, public_key=private_key.verify_key)


def signing_key_from_bytes(raw: bytes) -> nacl.signing.SigningKey:
    """
    Build a SigningKey from raw private key bytes.

    Accepts the 64-byte seed+public layout written by KeyStore and bare
    32-byte seeds.
    """
    if len(raw) == SECRET_KEY_SIZE:
        key = nacl.signing.SigningKey(raw[:SEED_SIZE])
        if bytes(key.verify_key) != raw[SEED_SIZE:]:
            raise FormatError("Private key is corrupt: public half does not match seed")
        return key
    if len(raw) == SEED_SIZE:
        return nacl.signing.SigningKey(raw)
    raise FormatError(
        f"Invalid private key length: {len(raw)} bytes (expected {SECRET_KEY_SIZE} or {SEED_SIZE})"
    )


def verify_key_from_bytes(raw: bytes) -> nacl.signing.VerifyKey:
    """Build a VerifyKey from raw 32-byte public key bytes."""
    if len(raw) != PUBLIC_KEY_SIZE:
        raise FormatError(f"Invalid public key length: {len(raw)} bytes (expected {PUBLIC_KEY_SIZE})")
    try:
        return nacl.signing.VerifyKey(raw)
    except nacl.exceptions.CryptoError as e:
        raise FormatError(f"Invalid public key: {e}") from e


def read_bytes(path: PathLike, what: str = "File") -> bytes:
    """Read a whole file, mapping OS errors onto edsign errors."""
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"{what} not found: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise StorageError(f"Cannot read {path}: {e.strerror or e}") from e


class KeyStore:
    """
    Locates, creates and loads raw key files.

    Keys are stored unwrapped: the private key file holds the 64-byte
    libsodium secret key, the public key file the 32-byte public key.
    """

    def __init__(self, config: Optional[EdSignConfig] = None):
        self.config = config or EdSignConfig.default()

    def default_private_key_path(self) -> Path:
        return self.config.private_key_path

    def default_public_key_path(self) -> Path:
        return self.config.public_key_path

    def create_keypair(self, overwrite: bool = False) -> KeyPair:
        """
        Generate a key pair and write it to the configured location.

        Args:
            overwrite: Replace key files that already exist

        Returns:
            KeyPair: The newly written key pair

        Raises:
            KeyExistsError: A key file exists and overwrite is False
            StorageError: The directory or a key file could not be written
        """
        private_path = self.default_private_key_path()
        public_path = self.default_public_key_path()

        if not overwrite:
            for existing in (private_path, public_path):
                if existing.exists():
                    raise KeyExistsError(f"Key file already exists: {existing}")

        keypair = generate_keypair()

        # Both files are staged before either key is replaced, so a failure
        # leaves the previous pair (or no pair) in place.
        staged = []
        try:
            private_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            public_path.parent.mkdir(parents=True, exist_ok=True)
            private_tmp = self._stage(private_path, keypair.private_key_bytes, staged, mode=0o600)
            public_tmp = self._stage(public_path, keypair.public_key_bytes, staged)

            previous_private = private_path.read_bytes() if private_path.exists() else None
            os.replace(private_tmp, private_path)
            try:
                os.replace(public_tmp, public_path)
            except OSError:
                self._restore(private_path, previous_private)
                raise
        except OSError as e:
            for tmp in staged:
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Cannot write key pair to {private_path.parent}: {e.strerror or e}") from e

        logger.debug(f"Wrote key pair, public key {keypair.public_key_b64}")
        return keypair

    @staticmethod
    def _stage(path: Path, data: bytes, staged: list, mode: int = 0o644) -> Path:
        """Write data next to path under a temporary name."""
        tmp = path.with_name(f"{path.name}.tmp")
        staged.append(tmp)
        tmp.touch(mode=mode)
        tmp.chmod(mode)
        tmp.write_bytes(data)
        return tmp

    @staticmethod
    def _restore(path: Path, previous: Optional[bytes]) -> None:
        """Put back the key that was at path before a failed replace."""
        if previous is None:
            path.unlink(missing_ok=True)
            return
        path.write_bytes(previous)
        logger.warning(f"Restored previous key at {path}")

    def load_private_key(self, path: Optional[PathLike] = None) -> bytes:
        """Read raw private key bytes, from the default path if none given."""
        return read_bytes(path or self.default_private_key_path(), "Private key file")

    def load_public_key(self, path: Optional[PathLike] = None) -> bytes:
        """Read raw public key bytes, from the default path if none given."""
        return read_bytes(path or self.default_public_key_path(), "Public key file")
