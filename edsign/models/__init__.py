"""Data models for edsign."""

from .artifact import SIG_SUFFIX, SignatureArtifact, artifact_path

__all__ = [
    "SIG_SUFFIX",
    "SignatureArtifact",
    "artifact_path",
]
