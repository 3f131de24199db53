"""
Tab Bridge Agent (FastAPI + Uvicorn)

Goals
- Same list/focus/launch operations as the CLI, over loopback HTTP, for launchers
  that would rather keep one process warm than spawn the CLI per keystroke.
- Auth: /health is open; /v1/* requires X-TabBridge-Token matching TABBRIDGE_TOKEN.
  With no token configured the API stays closed.
- Service calls are synchronous Apple Event round-trips; they run in a worker thread.
"""

from __future__ import annotations

import secrets
from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from tabbridge import settings
from tabbridge.adapters.registry import known_browsers
from tabbridge.models.schemas import BrowserInfo, FocusRequest
from tabbridge.services import tabs_service
from tabbridge.services.logs import configure_logging


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    logger.info("Agent startup; logs at {}", settings.LOG_DIR)
    if not settings.AGENT_TOKEN:
        logger.warning("TABBRIDGE_TOKEN is not set; /v1 endpoints will refuse every request")
    yield
    logger.info("Agent shutdown")


app = FastAPI(title="Tab Bridge Agent", version=settings.VERSION, lifespan=lifespan)


def _token_ok(supplied: str | None) -> bool:
    expected = settings.AGENT_TOKEN
    if not expected or not supplied:
        return False
    return secrets.compare_digest(supplied, expected)


@app.middleware("http")
async def dispatch(request: Request, call_next: Callable[..., Any]):
    """
    - Allow / and /health without token.
    - Require X-TabBridge-Token for /v1/*.
    """
    path = request.url.path or "/"
    if path.startswith("/v1"):
        if not _token_ok(request.headers.get("x-tabbridge-token")):
            logger.warning("Rejected request: missing/invalid X-TabBridge-Token")
            return JSONResponse({"error": "unauthorized"}, status_code=401)
    return await call_next(request)


# ---- Health ------------------------------------------------------------------


@app.get("/health")
async def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "name": "Tab Bridge Agent",
        "version": settings.VERSION,
        "port": settings.AGENT_PORT,
    }


# ---- Tabs --------------------------------------------------------------------


@app.get("/v1/browsers")
async def browsers() -> dict[str, Any]:
    return {
        "browsers": [
            BrowserInfo(name=name, family=family).to_wire()
            for name, family in known_browsers()
        ]
    }


@app.get("/v1/tabs/{browser}")
async def tabs_list(browser: str) -> dict[str, Any]:
    response = await tabs_service.alist_tabs(browser)
    return response.to_wire()


@app.post("/v1/tabs/{browser}/focus")
async def tabs_focus(browser: str, body: FocusRequest) -> dict[str, Any]:
    result = await tabs_service.afocus_tab(browser, body.query)
    return result.to_wire()


@app.post("/v1/apps/{browser}/launch")
async def apps_launch(browser: str) -> dict[str, Any]:
    result = await tabs_service.alaunch_app(browser)
    return result.to_wire()
