"""Key sizes and token wire-format offsets."""

# Key material
KEY_SIZE = 32  # bytes, AES-256 and HMAC-SHA-256

# Token layout: IV || tag || ciphertext
IV_SIZE = 16  # AES block size
TAG_SIZE = 32  # HMAC-SHA-256 digest size
BLOCK_SIZE_BITS = 128  # PKCS#7 padding unit

IV_END = IV_SIZE
TAG_END = IV_SIZE + TAG_SIZE
MIN_TOKEN_SIZE = TAG_END
