"""Key location configuration."""

from pathlib import Path

from pydantic import BaseModel, Field


def _default_key_dir() -> Path:
    return Path.home() / ".edsign"


class EdSignConfig(BaseModel):
    """Where key material lives on disk."""
    key_dir: Path = Field(default_factory=_default_key_dir, description="Directory holding the key pair")
    private_key_name: str = Field("private.key", description="File name of the raw private key")
    public_key_name: str = Field("public.key", description="File name of the raw public key")

    @classmethod
    def default(cls) -> "EdSignConfig":
        """Configuration rooted at the invoking user's home directory."""
        return cls()

    @classmethod
    def for_directory(cls, key_dir) -> "EdSignConfig":
        return cls(key_dir=Path(key_dir))

    @property
    def private_key_path(self) -> Path:
        return self.key_dir / self.private_key_name

    @property
    def public_key_path(self) -> Path:
        return self.key_dir / self.public_key_name
