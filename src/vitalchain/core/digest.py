from __future__ import annotations

import dataclasses
import hashlib
import math
from typing import Any, Dict, Mapping

import orjson

from vitalchain.core.errors import SerializationFailure


# Link value of the genesis block
SENTINEL = "0" * 64

_DUMPS_OPTS = orjson.OPT_SORT_KEYS


def _reject_non_finite(value: Any) -> None:
    # orjson writes NaN/inf as null, which would collide with a real null
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationFailure(f"Non-finite float {value!r} cannot be canonically encoded.")
    elif isinstance(value, Mapping):
        for v in value.values():
            _reject_non_finite(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            _reject_non_finite(v)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        for f in dataclasses.fields(value):
            _reject_non_finite(getattr(value, f.name))


def canonical_payload(payload: Any) -> Dict[str, Any]:
    """Normalize a payload to a plain JSON object.

    Accepts a mapping or a dataclass instance. Anything that orjson cannot
    encode deterministically surfaces as SerializationFailure.
    """
    if isinstance(payload, Mapping) and not isinstance(payload, dict):
        payload = dict(payload)
    elif not isinstance(payload, dict) and not (
        dataclasses.is_dataclass(payload) and not isinstance(payload, type)
    ):
        raise SerializationFailure(
            f"Payload must be a mapping or record, got {type(payload).__name__}."
        )
    try:
        data = orjson.dumps(payload, option=_DUMPS_OPTS)
    except orjson.JSONEncodeError as e:
        raise SerializationFailure(f"Payload cannot be canonically encoded: {e}") from e
    # orjson has already rejected cycles and nesting past its depth limit
    _reject_non_finite(payload)
    return orjson.loads(data)


def canonical_bytes(
    position: int, created_at: str, payload: Mapping[str, Any], previous_digest: str
) -> bytes:
    rec = {
        "position": position,
        "created_at": created_at,
        "payload": payload,
        "previous_digest": previous_digest,
    }
    try:
        return orjson.dumps(rec, option=_DUMPS_OPTS)
    except orjson.JSONEncodeError as e:
        raise SerializationFailure(f"Block fields cannot be canonically encoded: {e}") from e


def digest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def block_digest(
    position: int, created_at: str, payload: Mapping[str, Any], previous_digest: str
) -> str:
    return digest(canonical_bytes(position, created_at, payload, previous_digest))


__all__ = ["SENTINEL", "canonical_payload", "canonical_bytes", "digest", "block_digest"]
