"""Byte-level convenience wrappers."""

from .main import filecrypt


def derive_key(password: str | bytes):
    return filecrypt.derive_key(password)


def transform(direction, password: str | bytes, data: bytes):
    return filecrypt.transform(direction, password, data)


def encrypt(password: str | bytes, data: bytes):
    return filecrypt.encrypt(password, data)


def decrypt(password: str | bytes, data: bytes):
    return filecrypt.decrypt(password, data)


__all__ = [
    "decrypt",
    "derive_key",
    "encrypt",
    "transform",
]
