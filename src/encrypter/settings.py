"""Key provisioning settings loaded from environment variables."""

import base64
import binascii
import functools

from pydantic_settings import BaseSettings

from encrypter.exceptions import InvalidKeyError


def _decode_key(name: str, value: str) -> bytes:
    if not value:
        raise InvalidKeyError(f"{name} is not set")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidKeyError(f"{name} is not valid base64") from exc


class EncrypterSettings(BaseSettings):
    """Encrypter configuration.

    Keys are base64-encoded. An empty ``ENCRYPTER_AUTH_KEY`` means the cipher
    key is used for authentication as well.
    """

    ENCRYPTER_CIPHER_KEY: str = ""
    ENCRYPTER_AUTH_KEY: str = ""

    model_config = {"env_prefix": ""}

    def cipher_key(self) -> bytes:
        return _decode_key("ENCRYPTER_CIPHER_KEY", self.ENCRYPTER_CIPHER_KEY)

    def auth_key(self) -> bytes:
        if not self.ENCRYPTER_AUTH_KEY:
            return self.cipher_key()
        return _decode_key("ENCRYPTER_AUTH_KEY", self.ENCRYPTER_AUTH_KEY)


@functools.lru_cache(maxsize=1)
def get_settings() -> EncrypterSettings:
    """Return cached encrypter settings singleton."""
    return EncrypterSettings()
