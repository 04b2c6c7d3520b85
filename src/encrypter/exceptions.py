"""Encrypter exceptions."""

INVALID_TOKEN_MESSAGE = "The token could not be decrypted."


class EncrypterError(Exception):
    """Base exception for encrypter errors."""


class InvalidKeyError(EncrypterError, ValueError):
    """A cipher or authentication key is not exactly 32 bytes."""


class MissingCapabilityError(EncrypterError, RuntimeError):
    """The cryptography backend lacks a required primitive."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__("Required cryptographic primitives are unavailable: " + ", ".join(missing))


class SerializationFailedError(EncrypterError):
    """The value cannot be flattened into bytes before encryption."""


class EncryptionFailedError(EncrypterError):
    """The cipher layer failed while encrypting."""


class InvalidTokenError(EncrypterError):
    """Base for every decrypt-side failure.

    All subclasses share the same message so the text of the error does not
    reveal which check rejected the token.
    """

    def __init__(self) -> None:
        super().__init__(INVALID_TOKEN_MESSAGE)


class MalformedTokenError(InvalidTokenError):
    """The token is not valid base64 or is shorter than IV + tag."""


class AuthenticationFailedError(InvalidTokenError):
    """The HMAC tag does not match; decryption was not attempted."""


class DecryptionFailedError(InvalidTokenError):
    """The tag matched but the cipher layer rejected the ciphertext."""


class DeserializationFailedError(InvalidTokenError):
    """The decrypted plaintext could not be turned back into a value."""
