"""Capability set of the cryptography backend, resolved once per process."""

import functools
import logging
import os
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from encrypter.constants import IV_SIZE, KEY_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Which primitives the Encryptor needs are usable in this runtime."""

    aes_256_cbc: bool
    hmac_sha256: bool
    secure_random: bool

    @property
    def missing(self) -> list[str]:
        names = {
            "AES-256-CBC": self.aes_256_cbc,
            "HMAC-SHA-256": self.hmac_sha256,
            "secure random": self.secure_random,
        }
        return [name for name, available in names.items() if not available]


def _probe_aes_256_cbc() -> bool:
    try:
        cipher = Cipher(algorithms.AES(bytes(KEY_SIZE)), modes.CBC(bytes(IV_SIZE)))
        encryptor = cipher.encryptor()
        encryptor.update(bytes(IV_SIZE))
        encryptor.finalize()
    except UnsupportedAlgorithm:
        return False
    return True


def _probe_hmac_sha256() -> bool:
    try:
        mac = hmac.HMAC(bytes(KEY_SIZE), hashes.SHA256())
        mac.update(b"")
        mac.finalize()
    except UnsupportedAlgorithm:
        return False
    return True


def _probe_secure_random() -> bool:
    try:
        os.urandom(1)
    except NotImplementedError:
        return False
    return True


@functools.lru_cache(maxsize=1)
def detect_capabilities() -> Capabilities:
    """Probe the backend and return the cached capability set."""
    capabilities = Capabilities(
        aes_256_cbc=_probe_aes_256_cbc(),
        hmac_sha256=_probe_hmac_sha256(),
        secure_random=_probe_secure_random(),
    )
    if capabilities.missing:
        logger.warning("Cryptography backend is missing: %s", ", ".join(capabilities.missing))
    return capabilities
