"""Detached signature artifact (.sig file) model."""

import base64
import binascii
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from ..crypto.signing import SIGNATURE_SIZE
from ..errors import FormatError

SIG_SUFFIX = ".sig"


def artifact_path(file_path) -> Path:
    """Location of the detached signature for file_path."""
    return Path(f"{file_path}{SIG_SUFFIX}")


class SignatureArtifact(BaseModel):
    """
    Contents of a ``.sig`` file.

    Serialized as the base64 signature, followed by a single space and the
    comment when a comment is present.
    """
    signature: bytes = Field(..., description="Raw Ed25519 signature")
    comment: Optional[str] = Field(None, description="Free-form annotation, ignored on verify")

    @property
    def signature_b64(self) -> str:
        return base64.b64encode(self.signature).decode('utf-8')

    def to_text(self) -> str:
        """Render the on-disk text layout."""
        if self.comment:
            return f"{self.signature_b64} {self.comment}"
        return self.signature_b64

    @classmethod
    def parse(cls, text: str, source: str = "signature") -> "SignatureArtifact":
        """
        Parse the on-disk text layout.

        Args:
            text: Contents of a .sig file
            source: Name used in error messages

        Raises:
            FormatError: The signature token is not valid base64 or has the wrong size
        """
        text = text.rstrip("\r\n")
        token, _, comment = text.partition(" ")
        if not token:
            raise FormatError(f"Empty signature in {source}")

        try:
            signature = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FormatError(f"Invalid signature encoding in {source}") from e

        if len(signature) != SIGNATURE_SIZE:
            raise FormatError(
                f"Invalid signature length in {source}: {len(signature)} bytes (expected {SIGNATURE_SIZE})"
            )

        return cls(signature=signature, comment=comment or None)
