"""Tests for EncrypterSettings and settings-driven construction."""

import base64

import pytest

from encrypter import Encryptor, InvalidKeyError
from encrypter.settings import EncrypterSettings, get_settings


def _b64(key: bytes) -> str:
    return base64.b64encode(key).decode()


def test_defaults() -> None:
    """Settings have sensible defaults."""
    settings = EncrypterSettings()
    assert settings.ENCRYPTER_CIPHER_KEY == ""
    assert settings.ENCRYPTER_AUTH_KEY == ""


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings can be overridden via environment variables."""
    cipher_key = Encryptor.generate_key()
    monkeypatch.setenv("ENCRYPTER_CIPHER_KEY", _b64(cipher_key))

    settings = EncrypterSettings()
    assert settings.cipher_key() == cipher_key


def test_auth_key_defaults_to_cipher_key() -> None:
    cipher_key = Encryptor.generate_key()
    settings = EncrypterSettings(ENCRYPTER_CIPHER_KEY=_b64(cipher_key))
    assert settings.auth_key() == cipher_key


def test_separate_auth_key() -> None:
    cipher_key, auth_key = Encryptor.generate_key(), Encryptor.generate_key()
    settings = EncrypterSettings(ENCRYPTER_CIPHER_KEY=_b64(cipher_key), ENCRYPTER_AUTH_KEY=_b64(auth_key))
    assert settings.auth_key() == auth_key


def test_missing_cipher_key_raises() -> None:
    with pytest.raises(InvalidKeyError, match="ENCRYPTER_CIPHER_KEY is not set"):
        EncrypterSettings().cipher_key()


def test_invalid_base64_raises() -> None:
    settings = EncrypterSettings(ENCRYPTER_CIPHER_KEY="not base64!!")
    with pytest.raises(InvalidKeyError, match="not valid base64"):
        settings.cipher_key()


def test_from_settings_roundtrip() -> None:
    """An encryptor built from settings interoperates with one built from raw keys."""
    cipher_key, auth_key = Encryptor.generate_key(), Encryptor.generate_key()
    settings = EncrypterSettings(ENCRYPTER_CIPHER_KEY=_b64(cipher_key), ENCRYPTER_AUTH_KEY=_b64(auth_key))
    token = Encryptor.from_settings(settings).encrypt({"id": 7})
    assert Encryptor(cipher_key, auth_key).decrypt(token) == {"id": 7}


def test_from_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    key = Encryptor.generate_key()
    monkeypatch.setenv("ENCRYPTER_CIPHER_KEY", _b64(key))
    encryptor = Encryptor.from_settings()
    assert Encryptor.from_key(key).decrypt_string(encryptor.encrypt_string("env")) == "env"


def test_from_settings_rejects_short_key() -> None:
    settings = EncrypterSettings(ENCRYPTER_CIPHER_KEY=_b64(b"x" * 31))
    with pytest.raises(InvalidKeyError, match="exactly 32 bytes"):
        Encryptor.from_settings(settings)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
