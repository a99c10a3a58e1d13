from __future__ import annotations

import dataclasses

import pytest

from vitalchain.core.block import Block, DiagnosticRecord, FrozenPayload
from vitalchain.core.digest import SENTINEL
from vitalchain.core.errors import SerializationFailure


TS = "2024-01-01T00:00:00Z"
PAYLOAD = {"subject": "A", "label": "x", "confidence": 0.8}


def test_identical_fields_give_identical_blocks() -> None:
    a = Block(1, TS, dict(PAYLOAD), SENTINEL)
    b = Block(1, TS, dict(PAYLOAD), SENTINEL)
    assert a.digest == b.digest
    assert a == b
    assert hash(a) == hash(b)


@pytest.mark.parametrize(
    "field,value",
    [
        ("position", 2),
        ("created_at", "2024-01-01T00:00:01Z"),
        ("payload", {"subject": "A", "label": "x", "confidence": 0.81}),
        ("previous_digest", "f" * 64),
    ],
)
def test_changing_any_field_changes_digest(field, value) -> None:
    base = dict(position=1, created_at=TS, payload=dict(PAYLOAD), previous_digest=SENTINEL)
    other = dict(base, **{field: value})
    assert Block(**base).digest != Block(**other).digest


def test_block_is_frozen() -> None:
    b = Block(1, TS, dict(PAYLOAD), SENTINEL)
    with pytest.raises(dataclasses.FrozenInstanceError):
        b.digest = "0" * 64  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        b.payload = {}  # type: ignore[misc]


def test_payload_is_read_only_and_detached_from_caller() -> None:
    src = {"subject": "A", "tags": ["a", "b"], "meta": {"k": 1}}
    b = Block(1, TS, src, SENTINEL)
    src["subject"] = "Z"
    src["tags"].append("c")
    assert b.payload["subject"] == "A"
    assert b.payload["tags"] == ("a", "b")
    assert isinstance(b.payload["meta"], FrozenPayload)
    with pytest.raises(TypeError):
        b.payload["subject"] = "B"  # type: ignore[index]
    with pytest.raises(TypeError):
        b.payload["meta"].update(k=2)
    assert b.recompute_digest() == b.digest


def test_to_dict_returns_mutable_copy() -> None:
    b = Block(1, TS, {"tags": ["a"]}, SENTINEL)
    d = b.to_dict()
    assert d == {
        "position": 1,
        "created_at": TS,
        "payload": {"tags": ["a"]},
        "previous_digest": SENTINEL,
        "digest": b.digest,
    }
    d["payload"]["tags"].append("b")
    assert b.payload["tags"] == ("a",)


def test_unserializable_payload_fails_construction() -> None:
    with pytest.raises(SerializationFailure):
        Block(1, TS, {"x": object()}, SENTINEL)


@pytest.mark.parametrize("position", [-1, True, "1", 1.0])
def test_bad_position_rejected(position) -> None:
    with pytest.raises((TypeError, ValueError)):
        Block(position, TS, {}, SENTINEL)


def test_diagnostic_record_validation() -> None:
    rec = DiagnosticRecord(subject="A", label="x", confidence=1)
    assert rec.confidence == 1.0
    assert DiagnosticRecord(subject="A", label="x").as_payload()["confidence"] is None
    with pytest.raises(ValueError):
        DiagnosticRecord(subject="", label="x")
    with pytest.raises(ValueError):
        DiagnosticRecord(subject="A", label="  ")
    with pytest.raises(ValueError):
        DiagnosticRecord(subject="A", label="x", confidence=1.5)
    with pytest.raises(ValueError):
        DiagnosticRecord(subject="A", label="x", confidence=float("nan"))


@pytest.mark.parametrize("confidence", [True, False, "0.5", b"1", [0.5]])
def test_diagnostic_record_rejects_non_numeric_confidence(confidence) -> None:
    with pytest.raises(ValueError):
        DiagnosticRecord(subject="A", label="x", confidence=confidence)
