from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import orjson

from vitalchain.core.digest import block_digest, canonical_payload


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class FrozenPayload(dict):
    """Read-only dict; orjson still encodes it as a plain object."""

    def _readonly(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("Block payloads are read-only")

    __setitem__ = _readonly
    __delitem__ = _readonly
    __ior__ = _readonly  # type: ignore[assignment]
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly

    def __reduce__(self):  # type: ignore[override]
        return (FrozenPayload, (dict(self),))

    def __repr__(self) -> str:
        return f"FrozenPayload({dict.__repr__(self)})"


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return FrozenPayload({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class DiagnosticRecord:
    """One diagnostic event: who (anonymized), what was predicted, how sure."""

    subject: str
    label: str
    confidence: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.subject, str) or not self.subject.strip():
            raise ValueError("subject must be a non-empty string")
        if not isinstance(self.label, str) or not self.label.strip():
            raise ValueError("label must be a non-empty string")
        if self.confidence is not None:
            if isinstance(self.confidence, bool) or not isinstance(self.confidence, (int, float)):
                raise ValueError(
                    f"confidence must be a number, got {type(self.confidence).__name__}"
                )
            c = float(self.confidence)
            if not math.isfinite(c) or c < 0.0 or c > 1.0:
                raise ValueError(f"confidence must be within [0, 1], got {self.confidence!r}")
            object.__setattr__(self, "confidence", c)

    def as_payload(self) -> Dict[str, Any]:
        return {"subject": self.subject, "label": self.label, "confidence": self.confidence}


@dataclass(frozen=True)
class Block:
    position: int
    created_at: str
    payload: Mapping[str, Any]
    previous_digest: str
    digest: str = field(init=False)

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(f"position must be an int, got {type(self.position).__name__}")
        if self.position < 0:
            raise ValueError(f"position must be non-negative, got {self.position}")
        if not isinstance(self.created_at, str):
            raise TypeError("created_at must be an ISO-8601 string")
        if not isinstance(self.previous_digest, str):
            raise TypeError("previous_digest must be a string")
        object.__setattr__(self, "payload", _freeze(canonical_payload(self.payload)))
        object.__setattr__(self, "digest", self.recompute_digest())

    def __hash__(self) -> int:
        return hash(self.digest)

    def recompute_digest(self) -> str:
        return block_digest(self.position, self.created_at, self.payload, self.previous_digest)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "created_at": self.created_at,
            "payload": orjson.loads(orjson.dumps(self.payload)),
            "previous_digest": self.previous_digest,
            "digest": self.digest,
        }


__all__ = ["Block", "DiagnosticRecord", "FrozenPayload", "utc_now_iso"]
