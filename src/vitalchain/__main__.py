from __future__ import annotations

import argparse

import uvicorn
from dotenv import load_dotenv
from loguru import logger

from vitalchain.api.app import create_app
from vitalchain.core.config import load_settings
from vitalchain.core.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = load_settings()
    p = argparse.ArgumentParser(prog="vitalchain")
    p.add_argument("--host", type=str, default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.add_argument("--log-level", type=str, default=settings.log_level, dest="log_level")
    args = p.parse_args(argv)

    setup_logging(args.log_level, settings.log_dir)
    app = create_app(settings=settings)
    logger.bind(event="startup").info(
        {"host": args.host, "port": args.port, "env": settings.app_env}
    )
    # The ledger is in-memory only; stopping the server discards it
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
