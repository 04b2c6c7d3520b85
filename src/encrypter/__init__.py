"""Authenticated symmetric encryption of values (AES-256-CBC + HMAC-SHA-256)."""

from encrypter.crypto import Encryptor, constant_time_equals
from encrypter.exceptions import (
    AuthenticationFailedError,
    DecryptionFailedError,
    DeserializationFailedError,
    EncrypterError,
    EncryptionFailedError,
    InvalidKeyError,
    InvalidTokenError,
    MalformedTokenError,
    MissingCapabilityError,
    SerializationFailedError,
)
from encrypter.settings import EncrypterSettings, get_settings

__all__ = [
    "Encryptor",
    "constant_time_equals",
    "EncrypterSettings",
    "get_settings",
    "AuthenticationFailedError",
    "DecryptionFailedError",
    "DeserializationFailedError",
    "EncrypterError",
    "EncryptionFailedError",
    "InvalidKeyError",
    "InvalidTokenError",
    "MalformedTokenError",
    "MissingCapabilityError",
    "SerializationFailedError",
]
