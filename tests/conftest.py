"""Shared fixtures for encrypter tests."""

import pytest

from encrypter import Encryptor
from encrypter.settings import get_settings


@pytest.fixture
def known_key() -> bytes:
    return b"\x01" * 32


@pytest.fixture
def cipher_key() -> bytes:
    return Encryptor.generate_key()


@pytest.fixture
def auth_key() -> bytes:
    return Encryptor.generate_key()


@pytest.fixture
def encryptor(cipher_key: bytes, auth_key: bytes) -> Encryptor:
    return Encryptor(cipher_key, auth_key)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()
