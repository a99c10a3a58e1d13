from __future__ import annotations

from prometheus_client import Counter, Gauge

from vitalchain.core.ledger import Ledger
from vitalchain.core.validator import VerificationResult


BLOCKS_APPENDED = Counter(
    "vitalchain_blocks_appended_total",
    "Blocks appended to the ledger since process start",
)
LEDGER_LENGTH = Gauge(
    "vitalchain_ledger_length",
    "Current number of blocks in the ledger, genesis included",
)
VERIFICATIONS = Counter(
    "vitalchain_verifications_total",
    "Chain verifications by outcome",
    labelnames=("result",),
)


def observe_append(ledger: Ledger) -> None:
    BLOCKS_APPENDED.inc()
    LEDGER_LENGTH.set(ledger.length())


def observe_verify(result: VerificationResult) -> None:
    VERIFICATIONS.labels(result="valid" if result.valid else "invalid").inc()
