"""
HTTP front end for the remix service.

Exposes ``POST /github-remix`` (the remix endpoint, browser callable with
permissive CORS) and ``GET /health``.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .._version import __version__
from ..services import RemixService, handle_remix_request

INVALID_BODY_STATUS = 500


def create_app(service: Optional[RemixService] = None, settings: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: RemixService handling requests (a default one if None)
        settings: RemixContext settings applied to every run (api_url,
            max_workers, timeout, verify_tip, deadline_seconds)

    Returns:
        Configured FastAPI application
    """
    remix_service = service or RemixService()
    run_settings = dict(settings or {})

    app = FastAPI(
        title="git-remix",
        description="Replicate the content of one GitHub repository onto another",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok", "app": "git-remix", "version": __version__}

    @app.post("/github-remix")
    async def github_remix(request: Request) -> JSONResponse:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else None
        except ValueError as e:
            logging.warning("Rejected remix request: body is not valid JSON")
            return JSONResponse(
                status_code=INVALID_BODY_STATUS,
                content={"success": False, "error": f"invalid JSON body: {e}", "logs": []},
            )

        # The remix blocks on network calls; keep it off the event loop
        status, body = await run_in_threadpool(handle_remix_request, payload, remix_service, **run_settings)
        return JSONResponse(status_code=status, content=body)

    return app


__all__ = ["create_app"]
