"""Encryption of provider credentials stored in the database."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

SEALED_PREFIX = "fernet:"


def _fernet() -> Fernet:
    source = getattr(settings, "ENCRYPTION_KEY", "")
    if not source:
        raise ImproperlyConfigured("ENCRYPTION_KEY must be set to store channel credentials")
    key = base64.urlsafe_b64encode(hashlib.sha256(source.encode("utf-8")).digest())
    return Fernet(key)


def is_sealed(value: str | None) -> bool:
    return bool(value) and value.startswith(SEALED_PREFIX)


def seal_token(value: str) -> str:
    """Encrypt a plaintext token; already sealed or empty values pass through."""
    if not value or is_sealed(value):
        return value
    token = _fernet().encrypt(value.encode("utf-8")).decode("utf-8")
    return SEALED_PREFIX + token


def unseal_token(value: str | None) -> str:
    """Decrypt a sealed token. Plain values are returned untouched."""
    if not value:
        return ""
    if not is_sealed(value):
        return value
    try:
        return _fernet().decrypt(value[len(SEALED_PREFIX):].encode("utf-8")).decode("utf-8")
    except InvalidToken as exc:
        raise ImproperlyConfigured("Stored channel token cannot be decrypted with ENCRYPTION_KEY") from exc
