# -*- coding: utf-8 -*-
"""
Cardiovascular health API.

Lab results and symptom CRUD, health trends with composite risk, triage
alerts and CSV exports. Every /api route except auth, docs and the liveness
probe requires an authenticated user.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .errors import DomainValidationError
from .exports.api import router as exports_router
from .labs.api import router as lab_results_router
from .logging_setup import configure_logging
from .symptoms.api import router as symptoms_router
from .trends.api import router as trends_router
from .triage.api import router as triage_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cardiovascular Health API",
    description="Lab results, symptoms, health trends with composite risk, and triage alerts",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


@app.exception_handler(DomainValidationError)
async def _domain_validation_handler(_request: Request, exc: DomainValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(_request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, _exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth_router)
app.include_router(lab_results_router)
app.include_router(symptoms_router)
app.include_router(trends_router)
app.include_router(triage_router)
app.include_router(exports_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("CARDIO_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("CARDIO_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("cardiohealth.api:app", host=host, port=port, reload=False)
