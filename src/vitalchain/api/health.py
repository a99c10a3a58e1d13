from __future__ import annotations

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from vitalchain.api.deps import get_ledger
from vitalchain.api.metrics import observe_verify
from vitalchain.core.ledger import Ledger

router = APIRouter()

# Source of truth for runtime version
VERSION = "1.0.0"
BUILD_TIME = os.getenv("BUILD_TIME") or datetime.now(timezone.utc).isoformat().replace(
    "+00:00", "Z"
)


@router.get("/version")
def version():
    return {"version": VERSION, "build_time": BUILD_TIME}


@router.get("/healthz")
def healthz():
    return {"status": "ok", "version": VERSION, "build": os.getenv("BUILD_ID", "local")}


@router.get("/readyz")
def readyz(ledger: Ledger = Depends(get_ledger)):
    result = ledger.verify()
    observe_verify(result)
    return JSONResponse(
        status_code=status.HTTP_200_OK
        if result.valid
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "ready": result.valid,
            "components": {"ledger": result.valid},
            "length": result.length,
        },
    )
