from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger


_MASKED_KEYS = {"subject", "patientid", "patient_id", "token", "secret", "password", "key"}


def _mask(val: Any) -> str:
    s = "" if val is None else str(val)
    return s[:2] + "****" if len(s) > 2 else "****"


def redact_payload(obj: Any) -> Any:
    """Return a copy of obj with subject identifiers and secrets masked."""
    if isinstance(obj, dict):
        out: Dict[Any, Any] = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.lower() in _MASKED_KEYS:
                out[k] = _mask(v)
            else:
                out[k] = redact_payload(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [redact_payload(v) for v in obj]
    return obj


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    lvl = (level or "INFO").upper()
    logger.remove()
    logger.add(sys.stdout, level=lvl, serialize=True)
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            Path(log_dir) / "vitalchain.log",
            rotation="10 MB",
            retention="10 days",
            level=lvl,
            serialize=True,
        )


__all__ = ["setup_logging", "redact_payload"]
