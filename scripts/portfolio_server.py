"""Entry point for the portfolio backend."""

from __future__ import annotations

import asyncio
import logging

from portfolio_api.app import start_server
from portfolio_api.config import HOST, LOG_LEVEL, PORT
from portfolio_api.logging_control import setup_logging


log = logging.getLogger("portfolio_server")


async def _main() -> None:
    runner = await start_server(HOST, PORT)
    log.info("listening on http://%s:%s", HOST, PORT)
    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()


def main() -> None:
    setup_logging(LOG_LEVEL)
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        log.info("Shutting down...")


if __name__ == "__main__":
    main()
