"""Verification of detached file signatures."""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import click

from ..crypto import KeyStore, read_bytes, verify_key_from_bytes, verify_signature
from ..errors import FormatError, NotFoundError
from ..models.artifact import SignatureArtifact, artifact_path
from .batch import FileOutcome, echo_error, run_batch

logger = logging.getLogger(__name__)


class Verifier:
    """Checks files against their ``.sig`` artifacts and a public key."""

    def __init__(
        self,
        key_store: Optional[KeyStore] = None,
        reporter: Callable[[str], None] = click.echo,
        on_error: Callable[[str], None] = echo_error
    ):
        self.key_store = key_store or KeyStore()
        self.reporter = reporter
        self.on_error = on_error

    def load_artifact(self, file_path: str) -> SignatureArtifact:
        """Read and parse the artifact stored next to file_path."""
        sig_path = artifact_path(file_path)
        raw = read_bytes(sig_path, "Signature file")
        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FormatError(f"Signature file is not UTF-8 text: {sig_path}") from e
        return SignatureArtifact.parse(text, source=str(sig_path))

    def verify(self, file_path: str, public_key_path: Optional[str] = None) -> bool:
        """
        Verify one file and report the verdict.

        An invalid signature is a normal outcome, not an error.

        Args:
            file_path: Signed file
            public_key_path: Public key file (default key location if None)

        Returns:
            True if the signature is valid
        """
        key_path = Path(public_key_path) if public_key_path else self.key_store.default_public_key_path()
        if not Path(file_path).exists():
            raise NotFoundError(f"File not found: {file_path}")
        if not key_path.exists():
            raise NotFoundError(f"Public key file not found: {key_path}")

        contents = read_bytes(file_path)
        artifact = self.load_artifact(file_path)
        public_key = verify_key_from_bytes(self.key_store.load_public_key(key_path))

        valid = verify_signature(contents, artifact.signature, public_key)
        if artifact.comment:
            logger.debug(f"Signature comment for {file_path}: {artifact.comment}")
        self.reporter(f"Signature of {file_path} is {'valid' if valid else 'invalid'}")
        return valid

    def verify_files(
        self,
        paths: Iterable[str],
        public_key_path: Optional[str] = None,
        fail_fast: bool = True
    ) -> List[FileOutcome]:
        """Verify each path independently, in order."""
        return run_batch(
            paths,
            lambda path: self.verify(path, public_key_path),
            fail_fast=fail_fast,
            on_error=self.on_error
        )
