"""
Composite cache keys: logical key + optional params, JSON then base64.
Why: distinct params must never collide, and the key stays reversible.
"""

import base64
import json
from typing import Any, Dict, Optional


class KeyDerivationError(ValueError):
    """Raised when params cannot be serialized into a cache key."""


def _key_payload(key: str, params: Optional[Any]) -> Dict[str, Any]:
    # None is the "no params" marker; {} / 0 / "" are real payloads
    if params is None:
        return {"key": key}
    return {"key": key, "params": params}


def _check_dict_keys(value: Any) -> None:
    # json.dumps coerces 1 / True / None keys to strings, which would collide
    # with the matching str keys; only called after dumps ruled out cycles
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise KeyDerivationError(
                    f"params dict keys must be str, got {type(k).__name__} {k!r}"
                )
            _check_dict_keys(v)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_dict_keys(item)


def derive_key(key: str, params: Optional[Any] = None) -> str:
    """Encode (key, params) into a printable composite key.

    Serialization keeps the caller's dict ordering, so params only map to
    the same entry when they serialize identically. Dict keys inside params
    must be strings.
    """
    try:
        text = json.dumps(_key_payload(key, params), separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise KeyDerivationError(
            f"cannot derive cache key for {key!r}: {exc}"
        ) from exc
    _check_dict_keys(params)
    return base64.b64encode(text.encode("ascii")).decode("ascii")


def decode_key(cache_key: str) -> Dict[str, Any]:
    """Inverse of derive_key, for inspection."""
    return json.loads(base64.b64decode(cache_key.encode("ascii")).decode("ascii"))
