from .main import filecrypt, cli, main
from .errors import (
    CipherInitError,
    CipherUpdateError,
    FileAccessError,
    FileCryptError,
    KeyDerivationError,
    PaddingError,
)
from .api_bytes import decrypt, derive_key, encrypt, transform
from .api_files import decrypt_file, encrypt_file, transform_file, transform_files
from .version import __version__

Direction = filecrypt.Direction
KEY_LEN = filecrypt.KEY_LEN
IV_LEN = filecrypt.IV_LEN
BLOCK_SIZE = filecrypt.BLOCK_SIZE
KDF_ITERATIONS = filecrypt.KDF_ITERATIONS
ZERO_IV = filecrypt.ZERO_IV

__all__ = [
    "BLOCK_SIZE",
    "CipherInitError",
    "CipherUpdateError",
    "Direction",
    "FileAccessError",
    "FileCryptError",
    "IV_LEN",
    "KDF_ITERATIONS",
    "KEY_LEN",
    "KeyDerivationError",
    "PaddingError",
    "ZERO_IV",
    "__version__",
    "cli",
    "decrypt",
    "decrypt_file",
    "derive_key",
    "encrypt",
    "encrypt_file",
    "filecrypt",
    "main",
    "transform",
    "transform_file",
    "transform_files",
]
