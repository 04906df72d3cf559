# src/hikecast/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and installs middleware/error handlers.
Business logic lives in `hikecast.api.routes` and `hikecast.aggregator`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from hikecast import __version__
from hikecast.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="HikeCast API", version=__version__)

# CORS (dev-friendly): allow local frontends to call this API.
# Configure via env:
# - HIKECAST_CORS_ORIGINS="http://localhost:8081,http://127.0.0.1:8081"
# - HIKECAST_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("HIKECAST_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("HIKECAST_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def invalid_request_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400 in the same envelope the routes use."""
    return JSONResponse(
        status_code=400,
        content={"detail": {"code": "VALIDATION_ERROR", "message": "Invalid request body"}},
    )


app.include_router(router)
