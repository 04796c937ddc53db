"""File-oriented convenience wrappers."""

from .main import filecrypt


def encrypt_file(input_path: str, output_path: str, password: str | bytes):
    return filecrypt.transform_file(
        filecrypt.Direction.ENCRYPT,
        password,
        input_path,
        output_path,
    )


def decrypt_file(input_path: str, output_path: str, password: str | bytes):
    return filecrypt.transform_file(
        filecrypt.Direction.DECRYPT,
        password,
        input_path,
        output_path,
    )


def transform_file(direction, password: str | bytes, input_path: str, output_path: str):
    return filecrypt.transform_file(direction, password, input_path, output_path)


def transform_files(
    direction,
    password: str | bytes,
    paths,
    *,
    suffix: str = filecrypt.DEFAULT_SUFFIX,
    max_workers: int | None = None,
):
    return filecrypt.transform_files(
        direction,
        password,
        paths,
        suffix=suffix,
        max_workers=max_workers,
    )


__all__ = [
    "decrypt_file",
    "encrypt_file",
    "transform_file",
    "transform_files",
]
