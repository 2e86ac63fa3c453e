"""File-level signing and verification."""

from .batch import FileOutcome, run_batch
from .patterns import expand_pattern
from .signer import Signer, sign
from .verifier import Verifier

__all__ = [
    "FileOutcome",
    "run_batch",
    "expand_pattern",
    "Signer",
    "sign",
    "Verifier",
]
