"""
Local storage for HTLC secrets.

Secrets never leave the client until claim. With a password they are
sealed with AES-256-GCM under a PBKDF2-SHA256 key; without one they are
kept in plaintext and a warning is logged.

File format (JSON):
    {"<order_id>": "<secret hex>"}                  plaintext
    {"<order_id>": "enc:<hex(nonce || ciphertext)>"} encrypted
"""

import os
import json
import logging
import threading
from typing import Optional, Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import SDKError

log = logging.getLogger(__name__)

DEFAULT_SECRET_STORE_PATH = "~/.chronos/htlc_secrets.json"

KDF_SALT = b"chronos-vault-htlc-v1"
KDF_ITERATIONS = 100_000
NONCE_SIZE = 12  # 96-bit GCM nonce
ENCRYPTED_PREFIX = "enc:"


def derive_key(password: str) -> bytes:
    """AES-256 key from a password (PBKDF2-HMAC-SHA256)."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return kdf.derive(password.encode())


def seal(key: bytes, plaintext: str, aad: bytes) -> str:
    nonce = os.urandom(NONCE_SIZE)
    ct = AESGCM(key).encrypt(nonce, plaintext.encode(), aad)
    return ENCRYPTED_PREFIX + (nonce + ct).hex()


def unseal(key: bytes, blob: str, aad: bytes) -> str:
    raw = bytes.fromhex(blob[len(ENCRYPTED_PREFIX):])
    nonce, ct = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
    return AESGCM(key).decrypt(nonce, ct, aad).decode()


class SecretStore:
    """
    File-backed secret store keyed by order id.

    Pass path=None for an in-memory store (nothing written to disk).
    """

    def __init__(self, path: Optional[str] = DEFAULT_SECRET_STORE_PATH,
                 password: Optional[str] = None):
        self.path = os.path.expanduser(path) if path else None
        self._key = derive_key(password) if password else None
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._load()

    @property
    def encrypted(self) -> bool:
        return self._key is not None

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r") as f:
                self._entries = json.load(f)
            log.debug(f"Loaded {len(self._entries)} HTLC secrets from {self.path}")
        except (OSError, ValueError) as e:
            raise SDKError(f"Failed to load secret store {self.path}: {e}") from e

    def _save(self):
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w") as f:
            json.dump(self._entries, f, indent=2)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self.path)

    def put(self, order_id: str, secret: str):
        if self._key is None:
            if self.path:
                log.warning(f"Storing HTLC secret for {order_id} unencrypted - pass a password to SecretStore")
            value = secret
        else:
            value = seal(self._key, secret, order_id.encode())
        with self._lock:
            self._entries[order_id] = value
            self._save()

    def get(self, order_id: str) -> Optional[str]:
        """
        Stored secret or None.

        Raises:
            SDKError: entry is encrypted and the password is missing or wrong
        """
        with self._lock:
            value = self._entries.get(order_id)
        if value is None:
            return None

        if not value.startswith(ENCRYPTED_PREFIX):
            return value
        if self._key is None:
            raise SDKError(f"Secret for {order_id} is encrypted - password required")
        try:
            return unseal(self._key, value, order_id.encode())
        except (InvalidTag, ValueError) as e:
            raise SDKError(f"Failed to decrypt secret for {order_id}") from e

    def delete(self, order_id: str) -> bool:
        with self._lock:
            if order_id not in self._entries:
                return False
            del self._entries[order_id]
            self._save()
        return True

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
