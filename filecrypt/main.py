# FILECRYPT PASSWORD FILE CIPHER ->

import os as _os_module

from .errors import (
    CipherInitError,
    CipherUpdateError,
    FileAccessError,
    FileCryptError,
    KeyDerivationError,
    PaddingError,
)


class filecrypt:
    import concurrent.futures
    import enum
    import os
    import pathlib
    import sys
    import tempfile
    import typing
    try:
        import colorama
        colorama.init()  # Initialize colorama for cross-platform color support
    except ImportError:
        pass  # Colorama is optional
    from cryptography.exceptions import AlreadyFinalized, UnsupportedAlgorithm
    from cryptography.hazmat.primitives import hashes, padding
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

    @staticmethod
    def _env_int(name: str) -> "filecrypt.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed <= 0:
            return None
        return parsed

    @staticmethod
    def _env_flag(name: str) -> bool:
        value = (_os_module.getenv(name) or "").strip().lower()
        return value in {"1", "true", "yes", "on"}

    ENGINE_VERSION = "1.0.0"
    # Wire-format constants; changing any of them breaks existing files.
    KEY_LEN = 32
    IV_LEN = 16
    BLOCK_SIZE = 16
    KDF_ITERATIONS = 10_000
    KDF_SALT = b""
    ZERO_IV = bytes(IV_LEN)
    DEFAULT_SUFFIX = ".enc"
    DECRYPTED_SUFFIX = ".dec"
    MAX_INPUT_BYTES = 2 * 1024 * 1024 * 1024  # whole-file buffering cap
    _MAX_INPUT_BYTES_ENV = _env_int("FILECRYPT_MAX_INPUT_BYTES")
    if _MAX_INPUT_BYTES_ENV is not None:
        MAX_INPUT_BYTES = _MAX_INPUT_BYTES_ENV
    _CPU_COUNT = max(1, os.cpu_count() or 1)
    _SILENT_MODE: typing.ClassVar[bool] = False
    _WARNED_EMPTY_PASSWORD = False

    class Direction(enum.Enum):
        ENCRYPT = "encrypt"
        DECRYPT = "decrypt"

    _DIRECTION_ALIASES = {
        "encrypt": "encrypt",
        "enc": "encrypt",
        "e": "encrypt",
        "decrypt": "decrypt",
        "dec": "decrypt",
        "d": "decrypt",
    }

    @staticmethod
    def _coerce_direction(direction) -> "filecrypt.Direction":
        if isinstance(direction, filecrypt.Direction):
            return direction
        if isinstance(direction, str):
            normalized = filecrypt._DIRECTION_ALIASES.get(direction.strip().lower())
            if normalized:
                return filecrypt.Direction(normalized)
        raise ValueError(f"Unsupported direction: {direction!r}")

    @staticmethod
    def _coerce_password_bytes(
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if isinstance(password, str):
            return password.encode("utf-8")
        if isinstance(password, (bytes, bytearray, memoryview)):
            return bytes(password)
        raise TypeError(f"Unsupported password type: {type(password)!r}")

    @staticmethod
    def _warn_empty_password() -> None:
        if filecrypt._WARNED_EMPTY_PASSWORD or filecrypt._SILENT_MODE:
            return
        print(
            "Warning: empty password; the derived key offers no protection.",
            file=filecrypt.sys.stderr
        )
        filecrypt._WARNED_EMPTY_PASSWORD = True

    # ---------- Key derivation ----------------------------------------------

    @staticmethod
    def derive_key(
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        """
        Derive the 32-byte AES key for ``password``.

        PBKDF2-HMAC-SHA256 with an empty salt and 10000 iterations. The salt
        and the iteration count are fixed, so the same password always yields
        the same key.
        """
        try:
            pw = filecrypt._coerce_password_bytes(password)
        except UnicodeEncodeError as exc:
            raise KeyDerivationError(f"Password cannot be encoded as bytes: {exc}") from exc
        if not pw:
            filecrypt._warn_empty_password()
        try:
            kdf = filecrypt.PBKDF2HMAC(
                algorithm=filecrypt.hashes.SHA256(),
                length=filecrypt.KEY_LEN,
                salt=filecrypt.KDF_SALT,
                iterations=filecrypt.KDF_ITERATIONS
            )
            key = kdf.derive(pw)
        except (filecrypt.UnsupportedAlgorithm, ValueError, TypeError) as exc:
            raise KeyDerivationError(f"Error generating key from password: {exc}") from exc
        if len(key) != filecrypt.KEY_LEN:
            raise KeyDerivationError(
                f"Key derivation returned {len(key)} bytes, expected {filecrypt.KEY_LEN}"
            )
        return key

    # ---------- Cipher session ----------------------------------------------

    class _CipherSession:
        """
        Single-use AES-256-CBC context with PKCS#7 padding.

        Lifecycle: uninitialized -> initialized -> updated -> finalized ->
        released. Use it as a context manager; the context is released on every
        exit path and cannot be reopened.
        """

        UNINITIALIZED = "uninitialized"
        INITIALIZED = "initialized"
        UPDATED = "updated"
        FINALIZED = "finalized"
        RELEASED = "released"

        def __init__(self, key: bytes, iv: bytes, direction: "filecrypt.Direction"):
            self.state = self.UNINITIALIZED
            self._key = key
            self._iv = iv
            self._direction = filecrypt._coerce_direction(direction)
            self._context = None
            self._padding = None

        @property
        def encrypting(self) -> bool:
            return self._direction is filecrypt.Direction.ENCRYPT

        def __enter__(self) -> "filecrypt._CipherSession":
            try:
                self.open()
            except BaseException:
                self.release()
                raise
            return self

        def __exit__(self, exc_type, exc, tb) -> bool:
            self.release()
            return False

        def _require(self, expected: str, action: str) -> None:
            if self.state != expected:
                raise RuntimeError(f"Cannot {action} a cipher session in state '{self.state}'")

        def open(self) -> None:
            self._require(self.UNINITIALIZED, "open")
            if len(self._key) != filecrypt.KEY_LEN:
                raise CipherInitError(f"Key must be {filecrypt.KEY_LEN} bytes, got {len(self._key)}")
            if len(self._iv) != filecrypt.IV_LEN:
                raise CipherInitError(f"IV must be {filecrypt.IV_LEN} bytes, got {len(self._iv)}")
            try:
                cipher = filecrypt.Cipher(
                    filecrypt.algorithms.AES(self._key),
                    filecrypt.modes.CBC(self._iv)
                )
                pkcs7 = filecrypt.padding.PKCS7(filecrypt.BLOCK_SIZE * 8)
                if self.encrypting:
                    self._context = cipher.encryptor()
                    self._padding = pkcs7.padder()
                else:
                    self._context = cipher.decryptor()
                    self._padding = pkcs7.unpadder()
            except (filecrypt.UnsupportedAlgorithm, ValueError, TypeError) as exc:
                raise CipherInitError(f"Cannot initialise AES-256-CBC: {exc}") from exc
            self.state = self.INITIALIZED

        def update(self, data: bytes) -> bytes:
            self._require(self.INITIALIZED, "update")
            try:
                if self.encrypting:
                    out = self._context.update(self._padding.update(data))
                else:
                    out = self._padding.update(self._context.update(data))
            except (filecrypt.AlreadyFinalized, ValueError, TypeError) as exc:
                raise CipherUpdateError(f"Cipher update failed: {exc}") from exc
            self.state = self.UPDATED
            return out

        def finalize(self) -> bytes:
            self._require(self.UPDATED, "finalize")
            if self.encrypting:
                try:
                    out = self._context.update(self._padding.finalize()) + self._context.finalize()
                except (filecrypt.AlreadyFinalized, ValueError) as exc:
                    raise CipherUpdateError(f"Cipher finalisation failed: {exc}") from exc
            else:
                try:
                    tail = self._context.finalize()
                    out = self._padding.update(tail) + self._padding.finalize()
                except ValueError as exc:
                    raise PaddingError("Decryption failed: wrong password or corrupted file") from exc
            self.state = self.FINALIZED
            return out

        def release(self) -> None:
            self._context = None
            self._padding = None
            self._key = None
            self.state = self.RELEASED

    # ---------- Transform ---------------------------------------------------

    @staticmethod
    def transform(
        direction: "filecrypt.typing.Union[filecrypt.Direction, str]",
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]",
        data: bytes
    ) -> bytes:
        """
        Encrypt or decrypt ``data`` in one pass with a key derived from ``password``.

        Encryption always appends 1-16 bytes of PKCS#7 padding. Decryption
        validates the padding and raises `PaddingError` instead of returning an
        unvalidated buffer.
        """
        mode = filecrypt._coerce_direction(direction)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("transform expects bytes")
        key = filecrypt.derive_key(password)
        with filecrypt._CipherSession(key, filecrypt.ZERO_IV, mode) as session:
            body = session.update(bytes(data))
            tail = session.finalize()
        return body + tail

    @staticmethod
    def encrypt(
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]",
        data: bytes
    ) -> bytes:
        return filecrypt.transform(filecrypt.Direction.ENCRYPT, password, data)

    @staticmethod
    def decrypt(
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]",
        data: bytes
    ) -> bytes:
        return filecrypt.transform(filecrypt.Direction.DECRYPT, password, data)

    # ---------- File boundary -----------------------------------------------

    @staticmethod
    def _read_input(path: "filecrypt.typing.Union[str, filecrypt.pathlib.Path]") -> bytes:
        source = filecrypt.pathlib.Path(path)
        try:
            stat = source.stat()
        except OSError as exc:
            raise FileAccessError(f"Cannot open input file: {source}") from exc
        if not source.is_file():
            raise FileAccessError(f"Input is not a regular file: {source}")
        if stat.st_size > filecrypt.MAX_INPUT_BYTES:
            raise FileAccessError(
                f"Input file too large to buffer in memory: {source} "
                f"({stat.st_size} > {filecrypt.MAX_INPUT_BYTES} bytes)"
            )
        try:
            return source.read_bytes()
        except OSError as exc:
            raise FileAccessError(f"Cannot read input file: {source}") from exc

    @staticmethod
    def _write_output(
        path: "filecrypt.typing.Union[str, filecrypt.pathlib.Path]",
        data: bytes
    ) -> "filecrypt.pathlib.Path":
        target = filecrypt.pathlib.Path(path)
        tmp_path = None
        try:
            with filecrypt.tempfile.NamedTemporaryFile(
                'w+b',
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False
            ) as handle:
                tmp_path = filecrypt.pathlib.Path(handle.name)
                handle.write(data)
                handle.flush()
                filecrypt.os.fsync(handle.fileno())
            filecrypt.os.replace(tmp_path, target)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise FileAccessError(f"Cannot open output file: {target}") from exc
        return target

    @staticmethod
    def transform_file(
        direction: "filecrypt.typing.Union[filecrypt.Direction, str]",
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]",
        input_path: "filecrypt.typing.Union[str, filecrypt.pathlib.Path]",
        output_path: "filecrypt.typing.Union[str, filecrypt.pathlib.Path]"
    ) -> "filecrypt.pathlib.Path":
        """Read ``input_path`` whole, transform it and replace ``output_path`` only on success."""
        source = filecrypt.pathlib.Path(input_path)
        target = filecrypt.pathlib.Path(output_path)
        try:
            same = source.resolve() == target.resolve()
        except (OSError, RuntimeError) as exc:
            raise FileAccessError(f"Cannot resolve path: {exc}") from exc
        if same:
            raise FileAccessError(f"Input and output must differ: {source}")
        data = filecrypt._read_input(source)
        result = filecrypt.transform(direction, password, data)
        return filecrypt._write_output(target, result)

    @staticmethod
    def _default_output_path(
        path: "filecrypt.pathlib.Path",
        direction: "filecrypt.Direction",
        suffix: str
    ) -> "filecrypt.pathlib.Path":
        if direction is filecrypt.Direction.ENCRYPT:
            return path.with_name(path.name + suffix)
        if suffix and path.name.endswith(suffix) and len(path.name) > len(suffix):
            return path.with_name(path.name[:-len(suffix)])
        return path.with_name(path.name + filecrypt.DECRYPTED_SUFFIX)

    @staticmethod
    def transform_files(
        direction: "filecrypt.typing.Union[filecrypt.Direction, str]",
        password: "filecrypt.typing.Union[str, bytes, bytearray, memoryview]",
        paths: "filecrypt.typing.Iterable[filecrypt.typing.Union[str, filecrypt.pathlib.Path]]",
        *,
        suffix: str = DEFAULT_SUFFIX,
        max_workers: "filecrypt.typing.Optional[int]" = None
    ) -> "dict[str, str]":
        """
        Transform several files independently.

        Encryption writes ``<path><suffix>``; decryption strips ``suffix`` (or
        appends ``.dec`` when it is missing). Each file gets its own key
        derivation and cipher session. Returns ``{path: "SUCCESS!" | "FAIL! <reason>"}``
        in input order.
        """
        mode = filecrypt._coerce_direction(direction)
        items = [filecrypt.pathlib.Path(p) for p in paths]
        if not items:
            raise ValueError("No files provided")
        workers = max(1, min(max_workers or filecrypt._CPU_COUNT, len(items)))

        def _job(path: "filecrypt.pathlib.Path") -> str:
            target = filecrypt._default_output_path(path, mode, suffix)
            filecrypt.transform_file(mode, password, path, target)
            return "SUCCESS!"

        results: "dict[str, str]" = {}
        with filecrypt.concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [(str(path), pool.submit(_job, path)) for path in items]
            for key, future in futures:
                try:
                    results[key] = future.result()
                except (FileCryptError, OSError, RuntimeError, ValueError) as exc:
                    results[key] = f"FAIL! {exc}"
        return results


def cli(argv=None) -> int:
    import argparse

    def _cli_config_path() -> "filecrypt.pathlib.Path":
        cfg = _os_module.getenv("FILECRYPT_CLI_CONFIG")
        if cfg:
            return filecrypt.pathlib.Path(cfg).expanduser()
        base = _os_module.getenv("XDG_CONFIG_HOME") or "~/.config"
        return filecrypt.pathlib.Path(base).expanduser() / "filecrypt" / "cli.conf"

    def _cli_plain_mode(force: bool) -> bool:
        if force or _os_module.getenv("NO_COLOR") or filecrypt._env_flag("FILECRYPT_CLI_PLAIN"):
            return True
        try:
            lines = _cli_config_path().read_text(encoding="utf-8").lower().split()
        except (OSError, UnicodeDecodeError):
            return False
        return "plain=1" in lines or "plain=true" in lines

    class _CliTheme:
        def __init__(self, plain: bool):
            self.plain = plain

        def ok(self, msg: str) -> str:
            if self.plain:
                return msg
            return f"\033[32m✅ {msg}\033[0m"

        def err(self, msg: str) -> str:
            if self.plain:
                return msg
            return f"\033[31m❌ {msg}\033[0m"

    parser = argparse.ArgumentParser(
        prog="file_encrypt",
        usage="%(prog)s -e|-d -p <password> -i <input_file> -o <output_file>",
        description="Encrypt or decrypt a file with a password-derived AES-256 key"
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-e", "--encrypt",
        dest="direction",
        action="store_const",
        const=filecrypt.Direction.ENCRYPT,
        help="Encrypt the file"
    )
    mode.add_argument(
        "-d", "--decrypt",
        dest="direction",
        action="store_const",
        const=filecrypt.Direction.DECRYPT,
        help="Decrypt the file"
    )
    parser.add_argument(
        "-p", "--password",
        default=None,
        help="Password (falls back to --password-file, then FILECRYPT_PASSWORD)"
    )
    parser.add_argument(
        "--password-file",
        default=None,
        help="Read the password from the first line of this file"
    )
    parser.add_argument(
        "-i", "--input",
        dest="input_file",
        required=True,
        help="Input file path"
    )
    parser.add_argument(
        "-o", "--output",
        dest="output_file",
        required=True,
        help="Output file path"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only report errors"
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Disable colour and emoji in messages"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {filecrypt.ENGINE_VERSION}"
    )

    args = parser.parse_args(argv)
    theme = _CliTheme(_cli_plain_mode(args.plain))

    # argv and the environment arrive as str; fsencode restores the raw bytes
    password = _os_module.fsencode(args.password or "")
    if not password and args.password_file:
        try:
            with open(args.password_file, "rb") as handle:
                password = handle.readline().rstrip(b"\r\n")
        except OSError as exc:
            print(theme.err(f"Cannot read password file: {exc}"), file=filecrypt.sys.stderr)
            return 1
    if not password:
        password = _os_module.fsencode(_os_module.getenv("FILECRYPT_PASSWORD", ""))
    if not password:
        parser.error("a non-empty password is required (-p, --password-file or FILECRYPT_PASSWORD)")

    previous_silent = filecrypt._SILENT_MODE
    filecrypt._SILENT_MODE = args.quiet
    try:
        target = filecrypt.transform_file(args.direction, password, args.input_file, args.output_file)
    except PaddingError:
        print(theme.err("Decryption failed: wrong password or corrupted file"), file=filecrypt.sys.stderr)
        return 1
    except FileAccessError as exc:
        print(theme.err(str(exc)), file=filecrypt.sys.stderr)
        return 1
    except (KeyDerivationError, CipherInitError, CipherUpdateError) as exc:
        print(theme.err(f"Encryption error: {exc}"), file=filecrypt.sys.stderr)
        return 1
    finally:
        filecrypt._SILENT_MODE = previous_silent

    if not args.quiet:
        verb = "Encrypted" if args.direction is filecrypt.Direction.ENCRYPT else "Decrypted"
        print(theme.ok(f"{verb} {args.input_file} -> {target}"))
    return 0


def main(argv=None) -> int:
    return cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
