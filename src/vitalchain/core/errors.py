from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    pass


class SerializationFailure(LedgerError):
    """Payload could not be canonically encoded; nothing was appended."""


class BlockNotFound(LedgerError):
    def __init__(self, position: int, length: int) -> None:
        super().__init__(f"No block at position {position}; ledger length is {length}.")
        self.position = position
        self.length = length


class IntegrityViolation(LedgerError):
    """Raised when chain verification fails. Never retried or auto-corrected."""

    def __init__(self, position: int, reason: str, detail: Optional[str] = None) -> None:
        msg = f"Integrity violation at position {position}: {reason}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.position = position
        self.reason = reason


__all__ = ["LedgerError", "SerializationFailure", "BlockNotFound", "IntegrityViolation"]
