"""Encryption of tool session cookies (AES via Fernet).

Blob format: ``gtc1.<key id>.<fernet token>``. The key id is a short
fingerprint of the passphrase, so a blob names the key that sealed it and a
keyring of previous passphrases keeps old blobs readable after rotation.
"""
import base64
import hashlib
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Sequence

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from growtools.backend.config import get_settings

logger = logging.getLogger(__name__)

BLOB_VERSION = "gtc1"


class CookieBlobError(Exception):
    pass


class CookieKeyError(CookieBlobError):
    """Blob was sealed with a key that is not in the keyring."""


class CookieBlobCorrupt(CookieBlobError):
    """Blob is malformed, tampered with, or does not hold a cookie list."""


@lru_cache(maxsize=16)
def _get_fernet(secret: str) -> Fernet:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=b"growtools_cookies",
        iterations=100000,
    )
    key = base64.urlsafe_b64encode(kdf.derive(secret.encode()))
    return Fernet(key)


def key_id(secret: str) -> str:
    return hashlib.sha256(f"growtools-cookie-key:{secret}".encode()).hexdigest()[:8]


@dataclass(frozen=True)
class CookieKeyring:
    primary: str
    previous: tuple[str, ...] = field(default_factory=tuple)

    @property
    def primary_id(self) -> str:
        return key_id(self.primary)

    def secret_for(self, kid: str) -> str | None:
        for secret in (self.primary, *self.previous):
            if key_id(secret) == kid:
                return secret
        return None


def default_keyring() -> CookieKeyring:
    s = get_settings()
    return CookieKeyring(primary=s.cookie_encryption_key, previous=tuple(s.previous_cookie_keys))


def encrypt_cookies(cookies: Sequence[Any], keyring: CookieKeyring | None = None) -> str:
    ring = keyring or default_keyring()
    payload = json.dumps(list(cookies), ensure_ascii=False, separators=(",", ":"))
    token = _get_fernet(ring.primary).encrypt(payload.encode("utf-8")).decode()
    return f"{BLOB_VERSION}.{ring.primary_id}.{token}"


def _split_blob(blob: str) -> tuple[str, str]:
    if not isinstance(blob, str):
        raise CookieBlobCorrupt("blob is not a string")
    parts = blob.strip().split(".", 2)
    if len(parts) != 3 or parts[0] != BLOB_VERSION or not parts[1] or not parts[2]:
        raise CookieBlobCorrupt("unrecognized blob format")
    if not (parts[1].isascii() and parts[2].isascii()):
        raise CookieBlobCorrupt("blob is not ASCII")
    return parts[1], parts[2]


def open_cookie_blob(blob: str, keyring: CookieKeyring | None = None) -> list:
    """Strict decrypt: raises CookieKeyError or CookieBlobCorrupt."""
    ring = keyring or default_keyring()
    kid, token = _split_blob(blob)
    secret = ring.secret_for(kid)
    if secret is None:
        raise CookieKeyError(f"no key with id {kid}")
    try:
        plain = _get_fernet(secret).decrypt(token.encode())
    except InvalidToken as e:
        raise CookieBlobCorrupt("token failed authentication") from e
    try:
        data = json.loads(plain.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CookieBlobCorrupt("payload is not JSON") from e
    if not isinstance(data, list):
        raise CookieBlobCorrupt("payload is not a list")
    return data


def decrypt_cookies(blob: str, keyring: CookieKeyring | None = None) -> list:
    """Lenient decrypt for callers that only need cookies: [] on any failure."""
    try:
        return open_cookie_blob(blob, keyring)
    except CookieKeyError as e:
        logger.warning("Failed to decrypt cookies (wrong key): %s", e)
    except CookieBlobCorrupt as e:
        logger.warning("Failed to decrypt cookies (corrupt blob): %s", e)
    return []


def rotate_cookie_blob(blob: str, keyring: CookieKeyring | None = None) -> str:
    """Re-seal a blob under the primary key. Raises like open_cookie_blob."""
    ring = keyring or default_keyring()
    kid, _ = _split_blob(blob)
    if kid == ring.primary_id:
        return blob
    return encrypt_cookies(open_cookie_blob(blob, ring), ring)
