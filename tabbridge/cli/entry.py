"""
Tab Bridge agent entrypoint

Goals
- Simple uvicorn runner so scripts can `python -m tabbridge.cli.entry` or import run().
- Keep config via env (TABBRIDGE_HOST/TABBRIDGE_PORT) through settings.
- Loguru owns logging, so uvicorn's own dictConfig is switched off.
"""

from __future__ import annotations

import uvicorn
from loguru import logger

from tabbridge import settings


def run() -> None:
    config = uvicorn.Config(
        "tabbridge.main:app",
        host=settings.AGENT_HOST,
        port=settings.AGENT_PORT,
        reload=False,
        log_config=None,
        access_log=False,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    logger.info("Starting Uvicorn on {}:{}", settings.AGENT_HOST, settings.AGENT_PORT)
    try:
        server.run()  # blocking
    except Exception:  # noqa: BLE001
        logger.exception("Fatal error starting Tab Bridge agent")
        raise
    finally:
        logger.info("Uvicorn exited (graceful={})", getattr(server, "should_exit", None))


if __name__ == "__main__":
    run()
