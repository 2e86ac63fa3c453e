"""Error types raised by edsign operations."""


class EdSignError(Exception):
    """Base class for all edsign failures reported to the user."""


class NotFoundError(EdSignError):
    """A source file, key file or signature artifact does not exist."""


class StorageError(EdSignError):
    """Reading, writing or creating a directory failed at the OS level."""


class FormatError(EdSignError):
    """A key file or signature artifact could not be parsed."""


class KeyExistsError(EdSignError):
    """Key creation would overwrite an existing key file."""
