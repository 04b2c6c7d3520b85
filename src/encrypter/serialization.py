"""Structured value flattening for encryption.

Values are encoded as compact JSON with sorted keys, so equal values always
produce the same bytes. Supported types are ``None``, ``bool``, ``int``,
``float``, ``str``, lists (tuples come back as lists) and dicts keyed by
strings, nested to any depth.
"""

import json
from typing import Any

from encrypter.exceptions import DeserializationFailedError, SerializationFailedError


def _check_keys(value: Any) -> None:
    # json.dumps would silently turn int/float/bool/None keys into strings
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationFailedError(f"Mapping keys must be strings, got {type(key).__name__}")
            _check_keys(item)
    elif isinstance(value, list | tuple):
        for item in value:
            _check_keys(item)


def dumps(value: Any) -> bytes:
    """Flatten a structured value into UTF-8 JSON bytes."""
    try:
        _check_keys(value)
        text = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationFailedError(str(exc)) from exc


def loads(data: bytes) -> Any:
    """Reconstruct a value flattened by :func:`dumps`."""
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DeserializationFailedError() from exc
