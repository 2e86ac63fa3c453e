"""Detached signing of files."""

import logging
from typing import Callable, Iterable, List, Optional

import click

from ..crypto import read_bytes, sign_data, signing_key_from_bytes
from ..errors import FormatError, StorageError
from ..models.artifact import SignatureArtifact, artifact_path
from .batch import FileOutcome, echo_error, run_batch

logger = logging.getLogger(__name__)


class Signer:
    """
    Writes ``<file>.sig`` artifacts.

    One Signer holds one private key; every file it signs uses that key.
    """

    def __init__(
        self,
        private_key: bytes,
        reporter: Callable[[str], None] = click.echo,
        on_error: Callable[[str], None] = echo_error
    ):
        """
        Initialize signer.

        Args:
            private_key: Raw private key bytes (64-byte secret key or 32-byte seed)
            reporter: Receives one line per signed file
            on_error: Receives per-file error lines when not failing fast
        """
        self.signing_key = signing_key_from_bytes(private_key)
        self.reporter = reporter
        self.on_error = on_error

    def sign(self, file_path: str, comment: Optional[str] = None) -> SignatureArtifact:
        """
        Sign one file and write its artifact next to it.

        Args:
            file_path: File to sign
            comment: Optional annotation appended to the artifact

        Returns:
            SignatureArtifact: What was written
        """
        if comment:
            try:
                comment.encode('utf-8')
            except UnicodeEncodeError as e:
                raise FormatError("Comment is not valid UTF-8 text") from e

        contents = read_bytes(file_path)
        artifact = SignatureArtifact(
            signature=sign_data(contents, self.signing_key),
            comment=comment
        )
        data = artifact.to_text().encode('utf-8')

        sig_path = artifact_path(file_path)
        try:
            sig_path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Cannot write {sig_path}: {e.strerror or e}") from e

        logger.debug(f"Wrote {sig_path}")
        self.reporter(f"Signed file: {file_path}")
        return artifact

    def sign_files(
        self,
        paths: Iterable[str],
        comment: Optional[str] = None,
        fail_fast: bool = True
    ) -> List[FileOutcome]:
        """Sign each path in order with the same key and comment."""
        def sign_one(path):
            self.sign(path, comment)

        return run_batch(
            paths,
            sign_one,
            fail_fast=fail_fast,
            on_error=self.on_error
        )


def sign(file_path: str, private_key: bytes, comment: Optional[str] = None) -> SignatureArtifact:
    """Sign a single file with raw private key bytes."""
    return Signer(private_key).sign(file_path, comment)
