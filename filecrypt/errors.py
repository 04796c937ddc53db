"""
Error taxonomy for the filecrypt pipeline.

Every failure the pipeline can report derives from `FileCryptError`, so callers
can catch the whole family at once. Each class also inherits the builtin that
best describes it (`RuntimeError` for primitive faults, `ValueError` for bad
ciphertext, `OSError` for the file boundary) so generic handlers keep working.
"""

from __future__ import annotations


class FileCryptError(Exception):
    """Base class for every error raised by filecrypt."""


class KeyDerivationError(FileCryptError, RuntimeError):
    """Raised when PBKDF2 cannot be initialised or fails to derive a key."""


class CipherInitError(FileCryptError, RuntimeError):
    """Raised when the AES-256-CBC context cannot be created."""


class CipherUpdateError(FileCryptError, RuntimeError):
    """Raised when the bulk cipher step fails."""


class PaddingError(FileCryptError, ValueError):
    """
    Raised when decryption cannot be finalised.

    Invalid PKCS#7 padding, a ciphertext whose length is not a whole number of
    blocks and an empty ciphertext all end up here. In practice this almost
    always means a wrong password or a corrupted file.
    """


class FileAccessError(FileCryptError, OSError):
    """Raised when the input cannot be read or the output cannot be written."""


__all__ = [
    "CipherInitError",
    "CipherUpdateError",
    "FileAccessError",
    "FileCryptError",
    "KeyDerivationError",
    "PaddingError",
]
