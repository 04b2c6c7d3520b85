"""Authenticated encryption of values using AES-256-CBC with HMAC-SHA-256.

Tokens are encrypt-then-MAC: the HMAC tag covers ``IV || ciphertext`` and is
checked in constant time before any decryption is attempted. The wire format
is the standard base64 encoding of::

    IV (16 bytes) || tag (32 bytes) || ciphertext (multiple of 16 bytes)
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.constant_time import bytes_eq

from encrypter import serialization
from encrypter.backend import detect_capabilities
from encrypter.constants import BLOCK_SIZE_BITS, IV_END, IV_SIZE, KEY_SIZE, MIN_TOKEN_SIZE, TAG_END
from encrypter.exceptions import (
    AuthenticationFailedError,
    DecryptionFailedError,
    DeserializationFailedError,
    EncryptionFailedError,
    InvalidKeyError,
    MalformedTokenError,
    MissingCapabilityError,
    SerializationFailedError,
)
from encrypter.settings import EncrypterSettings, get_settings

logger = logging.getLogger(__name__)


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without leaking where they differ."""
    return bytes_eq(a, b)


def _validate_key(name: str, key: object) -> bytes:
    if not isinstance(key, bytes | bytearray | memoryview):
        raise InvalidKeyError(f"The {name} must be bytes, got {type(key).__name__}")
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise InvalidKeyError(f"The {name} must be exactly {KEY_SIZE} bytes, got {len(key)}")
    return key


class Encryptor:
    """Encrypts and decrypts values with a fixed cipher/authentication key pair.

    Each call to encrypt draws a fresh random IV, so the same value never
    produces the same token. Instances hold only immutable key bytes and are
    safe to share between threads.
    """

    __slots__ = ("_cipher_key", "_auth_key")

    def __init__(self, cipher_key: bytes, auth_key: bytes) -> None:
        missing = detect_capabilities().missing
        if missing:
            raise MissingCapabilityError(missing)
        self._cipher_key = _validate_key("encryption key", cipher_key)
        self._auth_key = _validate_key("authentication key", auth_key)

    @classmethod
    def from_key(cls, key: bytes) -> Encryptor:
        """Build an encryptor that uses one key for both encryption and authentication."""
        return cls(key, key)

    @classmethod
    def from_settings(cls, settings: EncrypterSettings | None = None) -> Encryptor:
        """Build an encryptor from base64 keys in the environment."""
        if settings is None:
            settings = get_settings()
        return cls(settings.cipher_key(), settings.auth_key())

    @staticmethod
    def generate_key() -> bytes:
        """Return a fresh random 32-byte key."""
        return os.urandom(KEY_SIZE)

    # --- encryption ---

    def encrypt(self, value: Any, serialize: bool = True) -> str:
        """Encrypt a value, returning a base64 token.

        With ``serialize`` the value is flattened first and may be any
        structured value; without it the value must be ``str`` or ``bytes``.
        """
        iv = os.urandom(IV_SIZE)
        if serialize:
            plaintext = serialization.dumps(value)
        elif isinstance(value, str):
            try:
                plaintext = value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise SerializationFailedError(str(exc)) from exc
        elif isinstance(value, bytes | bytearray | memoryview):
            plaintext = bytes(value)
        else:
            raise TypeError(f"Expected str or bytes without serialization, got {type(value).__name__}")

        ciphertext = self._encrypt_bytes(plaintext, iv)
        tag = self._hash(iv + ciphertext)
        return base64.b64encode(iv + tag + ciphertext).decode("ascii")

    def encrypt_string(self, value: str) -> str:
        """Encrypt a string without serialization."""
        return self.encrypt(value, serialize=False)

    def encrypt_bytes(self, value: bytes) -> str:
        """Encrypt raw bytes without serialization."""
        return self.encrypt(value, serialize=False)

    # --- decryption ---

    def decrypt(self, token: str | bytes, deserialize: bool = True) -> Any:
        """Verify and decrypt a token.

        Returns the reconstructed value, or the plaintext as ``str`` when
        ``deserialize`` is false. Every failure raises a subclass of
        :class:`~encrypter.exceptions.InvalidTokenError`.
        """
        plaintext = self.decrypt_bytes(token)
        if deserialize:
            return serialization.loads(plaintext)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("Decrypted payload is not valid UTF-8")
            raise DeserializationFailedError() from exc

    def decrypt_string(self, token: str | bytes) -> str:
        """Decrypt a token produced by :meth:`encrypt_string`."""
        return self.decrypt(token, deserialize=False)

    def decrypt_bytes(self, token: str | bytes) -> bytes:
        """Verify and decrypt a token, returning the raw plaintext bytes."""
        try:
            raw = base64.b64decode(token, validate=True)
        except (TypeError, ValueError) as exc:
            logger.warning("Rejected token: not valid base64")
            raise MalformedTokenError() from exc
        if len(raw) < MIN_TOKEN_SIZE:
            logger.warning("Rejected token: %d bytes is shorter than %d", len(raw), MIN_TOKEN_SIZE)
            raise MalformedTokenError()

        iv = raw[:IV_END]
        tag = raw[IV_END:TAG_END]
        ciphertext = raw[TAG_END:]

        if not constant_time_equals(tag, self._hash(iv + ciphertext)):
            logger.warning("Rejected token: authentication tag mismatch")
            raise AuthenticationFailedError()

        return self._decrypt_bytes(ciphertext, iv)

    # --- primitives ---

    def _hash(self, data: bytes) -> bytes:
        mac = hmac.HMAC(self._auth_key, hashes.SHA256())
        mac.update(data)
        return mac.finalize()

    def _encrypt_bytes(self, plaintext: bytes, iv: bytes) -> bytes:
        try:
            padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
            padded = padder.update(plaintext) + padder.finalize()
            encryptor = Cipher(algorithms.AES(self._cipher_key), modes.CBC(iv)).encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()
        except (ValueError, UnsupportedAlgorithm) as exc:
            logger.error("AES-256-CBC encryption failed", exc_info=True)
            raise EncryptionFailedError("Encryption failed") from exc
        return ciphertext

    def _decrypt_bytes(self, ciphertext: bytes, iv: bytes) -> bytes:
        try:
            decryptor = Cipher(algorithms.AES(self._cipher_key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            logger.warning("Rejected token: ciphertext failed to decrypt")
            raise DecryptionFailedError() from exc
