"""
AES-256-CBC encryption for admin-stored secrets.

The key file is created once (``bootstrap``) and never rotated. Each
encryption uses a fresh random IV, stored length-prefixed in front of the
ciphertext:

    base64( len(iv)[1] || iv[16] || AES-256-CBC(PKCS7(plaintext)) )

Values written with the stored IV and no prefix (the legacy layout)
still decrypt. The one-byte prefix makes the decoded length of the
current layout ``1 (mod 16)`` while legacy values are whole blocks, so
the two never get confused.
"""
import base64
import binascii
import json
import os
import secrets
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ...exceptions import CredentialsUnavailable, StorageUnavailable
from ...utils.logger import get_logger
from ...utils.persistence.file_utils import get_credential_file_path

log = get_logger(__name__)

KEY_SIZE = 32
IV_SIZE = 16
_BLOCK_BITS = algorithms.AES.block_size
_BLOCK_BYTES = _BLOCK_BITS // 8


@dataclass(frozen=True)
class CredentialPair:
    """Raw AES key and IV loaded from the key file."""

    key: bytes
    iv: bytes


class CredentialStore:
    """Persists a key/IV pair and encrypts small secret strings.

    Args:
        key_file: Path to the JSON key file (defaults to
            ``<data dir>/secure-data/crypto.json``)
    """

    def __init__(self, key_file: Optional[str] = None):
        self.key_file = key_file or get_credential_file_path()

    # ── Key file ───────────────────────────────────────────────────────

    def exists(self) -> bool:
        return os.path.exists(self.key_file)

    def bootstrap(self) -> bool:
        """Create the key file if it does not exist yet.

        The file is written to a private temp file and hard-linked into
        place, so concurrent first runs agree on a single key pair and an
        existing file is never overwritten.

        Returns:
            True if a new key file was created, False if one already existed

        Raises:
            StorageUnavailable: If the directory or file cannot be written
        """
        directory = os.path.dirname(self.key_file)
        try:
            os.makedirs(directory, mode=0o700, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Failed to create secure data directory {directory}: {e}") from e

        if self.exists():
            log.debug("Key file already present at %s", self.key_file)
            return False

        data = {
            "key": base64.b64encode(secrets.token_bytes(KEY_SIZE)).decode("ascii"),
            "iv": base64.b64encode(secrets.token_bytes(IV_SIZE)).decode("ascii"),
        }
        temp_path = f"{self.key_file}.{os.getpid()}.{secrets.token_hex(4)}.tmp"

        try:
            fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w") as f:
                json.dump(data, f)
            os.chmod(temp_path, 0o600)
            try:
                os.link(temp_path, self.key_file)
            except FileExistsError:
                log.debug("Another process created %s first", self.key_file)
                return False
        except OSError as e:
            raise StorageUnavailable(f"Failed to write encryption keys to {self.key_file}: {e}") from e
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)

        log.info("Created encryption key file at %s", self.key_file)
        return True

    def load_key_pair(self) -> CredentialPair:
        """Load the AES key and IV from the key file.

        Raises:
            CredentialsUnavailable: If the file is missing or the data is invalid
        """
        if not self.exists():
            raise CredentialsUnavailable(f"Crypto key file not found: {self.key_file}")

        try:
            with open(self.key_file, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CredentialsUnavailable(f"Crypto key file is unreadable: {e}") from e

        if not isinstance(data, dict) or not data.get("key") or not data.get("iv"):
            raise CredentialsUnavailable("Key or IV is missing from the key file")

        try:
            key = base64.b64decode(data["key"], validate=True)
            iv = base64.b64decode(data["iv"], validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise CredentialsUnavailable(f"Key file holds invalid base64: {e}") from e

        if len(key) != KEY_SIZE or len(iv) != IV_SIZE:
            raise CredentialsUnavailable("Key file holds key material of the wrong length")

        return CredentialPair(key=key, iv=iv)

    # ── Encryption ─────────────────────────────────────────────────────

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string with a fresh IV.

        Args:
            plaintext: Text to encrypt (any unicode, may be empty)

        Returns:
            Base64 of ``len(iv) || iv || ciphertext``

        Raises:
            CredentialsUnavailable: If the key pair cannot be loaded
        """
        pair = self.load_key_pair()
        iv = secrets.token_bytes(IV_SIZE)

        padder = padding.PKCS7(_BLOCK_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(pair.key), modes.CBC(iv)).encryptor()
        encrypted = encryptor.update(padded) + encryptor.finalize()

        return base64.b64encode(bytes([IV_SIZE]) + iv + encrypted).decode("ascii")

    def decrypt(self, ciphertext: str) -> Optional[str]:
        """Decrypt a value produced by :meth:`encrypt`.

        Args:
            ciphertext: Base64-encoded ciphertext

        Returns:
            The plaintext, or None when the input is not a valid ciphertext
            for the stored key (e.g. it is still plaintext)

        Raises:
            CredentialsUnavailable: If the key pair cannot be loaded
        """
        pair = self.load_key_pair()

        if not isinstance(ciphertext, str) or not ciphertext:
            return None

        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError):
            return None

        if len(raw) % _BLOCK_BYTES == 1 and raw[0] == IV_SIZE:
            return _decrypt_raw(pair.key, raw[1:1 + IV_SIZE], raw[1 + IV_SIZE:])

        return _decrypt_raw(pair.key, pair.iv, raw)

    def is_encrypted(self, value: str) -> bool:
        """Guess whether a value is already ciphertext.

        A value counts as encrypted when it decrypts successfully to
        something different from itself. Plaintext that happens to decrypt
        is misclassified; inputs are AWS keys, so that is accepted.
        """
        if not value:
            return False

        try:
            decrypted = self.decrypt(value)
        except CredentialsUnavailable as e:
            log.debug("Encryption check failed: %s", e)
            return False

        return decrypted is not None and decrypted != value


def _decrypt_raw(key: bytes, iv: bytes, data: bytes) -> Optional[str]:
    """Decrypt and unpad one candidate layout, None on any mismatch."""
    if not data or len(data) % _BLOCK_BYTES:
        return None

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(data) + decryptor.finalize()

    try:
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except ValueError:
        # Bad padding or non UTF-8 output
        return None
