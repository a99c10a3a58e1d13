from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from loguru import logger

from vitalchain.core.block import Block
from vitalchain.core.digest import SENTINEL
from vitalchain.core.errors import IntegrityViolation, SerializationFailure

if TYPE_CHECKING:
    from vitalchain.core.ledger import Ledger


class FailureReason(str, Enum):
    LINK_MISMATCH = "link_mismatch"
    DIGEST_MISMATCH = "digest_mismatch"
    POSITION_MISMATCH = "position_mismatch"


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    position: Optional[int] = None
    reason: Optional[FailureReason] = None
    # Number of blocks the result covers; not part of equality
    length: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not self.valid and (self.position is None or self.reason is None):
            raise ValueError("an invalid result needs a position and a reason")

    @classmethod
    def ok(cls, length: int = 0) -> "VerificationResult":
        return cls(valid=True, length=length)

    @classmethod
    def invalid(
        cls, position: int, reason: FailureReason, length: int = 0
    ) -> "VerificationResult":
        return cls(valid=False, position=position, reason=reason, length=length)

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_status(self) -> None:
        if self.valid:
            return
        # position and reason are set for every invalid result (see __post_init__)
        raise IntegrityViolation(self.position, self.reason.value)  # type: ignore[arg-type, union-attr]


def _digest_matches(block: Block) -> bool:
    try:
        return block.recompute_digest() == block.digest
    except SerializationFailure:
        return False


def verify_blocks(blocks: Sequence[Block]) -> VerificationResult:
    """Walk blocks in order and report the first broken invariant.

    Position 0 must link to the sentinel and match its own digest. Every later
    block is checked for its link to the predecessor, then its own digest,
    then its position.
    """
    n = len(blocks)
    for i, block in enumerate(blocks):
        if i == 0:
            if block.previous_digest != SENTINEL:
                return VerificationResult.invalid(0, FailureReason.LINK_MISMATCH, n)
            if not _digest_matches(block):
                return VerificationResult.invalid(0, FailureReason.DIGEST_MISMATCH, n)
            if block.position != 0:
                return VerificationResult.invalid(0, FailureReason.POSITION_MISMATCH, n)
            continue
        if block.previous_digest != blocks[i - 1].digest:
            return VerificationResult.invalid(i, FailureReason.LINK_MISMATCH, n)
        if not _digest_matches(block):
            return VerificationResult.invalid(i, FailureReason.DIGEST_MISMATCH, n)
        if block.position != i:
            return VerificationResult.invalid(i, FailureReason.POSITION_MISMATCH, n)
    return VerificationResult.ok(n)


def verify(ledger: "Ledger") -> VerificationResult:
    blocks = ledger.all()
    result = verify_blocks(blocks)
    if result.valid:
        logger.bind(event="ledger_verify").debug({"valid": True, "length": len(blocks)})
    else:
        logger.bind(event="integrity_violation").critical(
            {
                "position": result.position,
                "reason": result.reason.value if result.reason else None,
                "length": len(blocks),
            }
        )
    return result


def ensure_valid(ledger: "Ledger") -> None:
    verify(ledger).raise_for_status()


__all__ = [
    "FailureReason",
    "VerificationResult",
    "verify",
    "verify_blocks",
    "ensure_valid",
]
