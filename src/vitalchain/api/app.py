from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from vitalchain.api.health import router as health_router
from vitalchain.api.metrics import LEDGER_LENGTH
from vitalchain.api.ratelimit import general_rate_limit
from vitalchain.api.routes.chain import router as chain_router
from vitalchain.core.config import Settings, load_settings
from vitalchain.core.ledger import Ledger


def create_app(
    ledger: Optional[Ledger] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """Build the API around an explicitly owned ledger.

    When no ledger is given a fresh one is created for this app instance.
    """
    settings = settings or load_settings()
    if ledger is None:
        ledger = Ledger(genesis_payload=settings.genesis_payload())

    app = FastAPI(title="VitalChain Ledger API")
    app.state.settings = settings
    app.state.ledger = ledger
    LEDGER_LENGTH.set(ledger.length())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins_list() or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    deps_common = [Depends(general_rate_limit)]
    app.include_router(health_router, dependencies=deps_common, tags=["Health"])
    app.include_router(chain_router, dependencies=deps_common, tags=["Chain"])

    @app.get("/metrics")
    def metrics() -> Response:
        data = generate_latest(REGISTRY)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    return app
