"""edsign - detached Ed25519 signatures for files."""

__version__ = "1.0.0"
