from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class RecordSubmission(BaseModel):
    # Accepts both the ledger's field names and the frontend's legacy ones
    subject: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("subject", "patientId")
    )
    label: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("label", "disease")
    )
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class BlockOut(BaseModel):
    position: int
    created_at: str
    payload: Dict[str, Any]
    previous_digest: str
    digest: str


class Receipt(BaseModel):
    position: int
    created_at: str
    digest: str
    previous_digest: str


class RecordResponse(BaseModel):
    message: str
    block: Receipt


class ChainOut(BaseModel):
    chain: List[BlockOut]
    length: int


class VerifyOut(BaseModel):
    valid: bool
    position: Optional[int] = None
    reason: Optional[str] = None
    length: int
