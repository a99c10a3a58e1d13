from __future__ import annotations

from fastapi import Request

from vitalchain.core.config import Settings
from vitalchain.core.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
