"""
Symmetric encryption helpers for secrets persisted in the store (e.g., the TMDB credential).
"""
import base64
import hashlib
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from movieapp.core.config import settings


def _fernet(secret: Optional[str] = None) -> Fernet:
    """Derive a Fernet instance from the configured credential key.
    Uses SHA-256 of the secret to produce a 32-byte key and urlsafe-base64 encodes it.
    """
    secret = secret or settings.CREDENTIAL_KEY
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    key = base64.urlsafe_b64encode(digest)
    return Fernet(key)


def encrypt_secret(value: str, secret: Optional[str] = None) -> str:
    """Encrypt a plaintext string; returns urlsafe base64 token."""
    token = _fernet(secret).encrypt(value.encode("utf-8"))
    return token.decode("utf-8")


def decrypt_secret(token: str, secret: Optional[str] = None) -> Optional[str]:
    """Decrypt an encrypted token; returns None if invalid or encrypted with another key."""
    try:
        return _fernet(secret).decrypt(token.encode("utf-8")).decode("utf-8")
    except (InvalidToken, ValueError, TypeError):
        return None
