from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from loguru import logger

from vitalchain.api.deps import get_ledger
from vitalchain.api.metrics import observe_append, observe_verify
from vitalchain.api.models import (
    BlockOut,
    ChainOut,
    Receipt,
    RecordResponse,
    RecordSubmission,
    VerifyOut,
)
from vitalchain.core.block import DiagnosticRecord
from vitalchain.core.errors import BlockNotFound, SerializationFailure
from vitalchain.core.ledger import Ledger


router = APIRouter()


@router.get("/api/chain", response_model=ChainOut)
def chain(ledger: Ledger = Depends(get_ledger)) -> ChainOut:
    blocks = ledger.all()
    return ChainOut(
        chain=[BlockOut(**b.to_dict()) for b in blocks],
        length=len(blocks),
    )


@router.get("/api/chain/verify", response_model=VerifyOut)
def chain_verify(ledger: Ledger = Depends(get_ledger)):
    result = ledger.verify()
    observe_verify(result)
    body = VerifyOut(
        valid=result.valid,
        position=result.position,
        reason=result.reason.value if result.reason else None,
        length=result.length,
    )
    if not result.valid:
        # Tampering or a construction bug; surface it, never paper over it
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.model_dump())
    return body


@router.get("/api/chain/{position}", response_model=BlockOut)
def chain_block(position: int, ledger: Ledger = Depends(get_ledger)) -> BlockOut:
    try:
        block = ledger.block_at(position)
    except BlockNotFound:
        raise HTTPException(status_code=404, detail="no such record")
    return BlockOut(**block.to_dict())


@router.post("/api/record", response_model=RecordResponse)
def record(sub: RecordSubmission, ledger: Ledger = Depends(get_ledger)) -> RecordResponse:
    if not (sub.subject or "").strip() or not (sub.label or "").strip():
        raise HTTPException(status_code=400, detail="Missing data")
    try:
        rec = DiagnosticRecord(subject=sub.subject, label=sub.label, confidence=sub.confidence)
        block = ledger.append(rec)
    except (ValueError, SerializationFailure) as e:
        raise HTTPException(status_code=400, detail=str(e))
    observe_append(ledger)
    logger.bind(event="record_added").info({"position": block.position, "digest": block.digest})
    return RecordResponse(
        message="Block added successfully",
        block=Receipt(
            position=block.position,
            created_at=block.created_at,
            digest=block.digest,
            previous_digest=block.previous_digest,
        ),
    )
