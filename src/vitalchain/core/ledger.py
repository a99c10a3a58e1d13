from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Tuple, Union

from loguru import logger

from vitalchain.core.block import Block, DiagnosticRecord, utc_now_iso
from vitalchain.core.digest import SENTINEL
from vitalchain.core.errors import BlockNotFound
from vitalchain.core.locks import ReadWriteLock
from vitalchain.core.logging import redact_payload
from vitalchain.core.validator import VerificationResult, verify

Payload = Union[Mapping[str, Any], DiagnosticRecord]

GENESIS_PAYLOAD = {"event": "genesis"}


class Ledger:
    """Append-only, in-memory chain of blocks linked by SHA-256 digests.

    Every ledger starts with a genesis block whose previous_digest is the
    all-zero sentinel. Appends are serialized by the write side of a
    reader/writer lock; reads take the shared side and only ever see fully
    linked blocks. Nothing is persisted: the chain lives as long as the
    process does.
    """

    def __init__(
        self,
        genesis_payload: Optional[Payload] = None,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        self._clock = clock or utc_now_iso
        self._lock = ReadWriteLock()
        genesis = Block(
            0,
            self._clock(),
            GENESIS_PAYLOAD if genesis_payload is None else genesis_payload,
            SENTINEL,
        )
        self._blocks = [genesis]
        logger.bind(event="ledger_genesis").info(
            {"position": 0, "digest": genesis.digest}
        )

    def append(self, payload: Payload) -> Block:
        with self._lock.write():
            tail = self._blocks[-1]
            # Construction can raise SerializationFailure; nothing is pushed then
            block = Block(tail.position + 1, self._clock(), payload, tail.digest)
            self._blocks.append(block)
        logger.bind(event="ledger_append").info(
            {
                "position": block.position,
                "digest": block.digest,
                "previous_digest": block.previous_digest,
                "payload": redact_payload(block.to_dict()["payload"]),
            }
        )
        return block

    def length(self) -> int:
        with self._lock.read():
            return len(self._blocks)

    def __len__(self) -> int:
        return self.length()

    def block_at(self, position: int) -> Block:
        with self._lock.read():
            n = len(self._blocks)
            if isinstance(position, bool) or not isinstance(position, int):
                raise TypeError("position must be an int")
            if position < 0 or position >= n:
                raise BlockNotFound(position, n)
            return self._blocks[position]

    def tail(self) -> Block:
        with self._lock.read():
            return self._blocks[-1]

    def all(self) -> Tuple[Block, ...]:
        with self._lock.read():
            return tuple(self._blocks)

    def verify(self) -> VerificationResult:
        return verify(self)


__all__ = ["Ledger", "GENESIS_PAYLOAD", "Payload"]
