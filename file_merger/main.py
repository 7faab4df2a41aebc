# file_merger/main.py
from __future__ import annotations

import json
import os
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from file_merger.api import routers
from file_merger.core.config import get_settings
from file_merger.core.errors import FileMergerError
from file_merger.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
def _as_list(val: Iterable | str | None, fallback: list[str]) -> list[str]:
    if val is None:
        return fallback
    if isinstance(val, (list, tuple, set)):
        return [str(x).strip() for x in val if str(x).strip()] or fallback
    s = str(val).strip()
    if not s:
        return fallback
    # يدعم "a,b,c" أو JSON list مثل '["a","b"]'
    if s.startswith("["):
        try:
            parsed = json.loads(s)
            return [str(x).strip() for x in parsed if str(x).strip()]
        except ValueError:
            pass
    return [x.strip() for x in s.split(",") if x.strip()]


allow_origins = _as_list(
    os.getenv("ALLOWED_ORIGINS") or settings.allow_origins,
    fallback=["*"],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # لقراءة اسم الملف من الهيدر عند التنزيل
)


# === Errors ===
@app.exception_handler(FileMergerError)
async def file_merger_error_handler(request: Request, exc: FileMergerError) -> JSONResponse:
    logger.warning("%s %s فشل: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "errorMessage": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "errorMessage": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = "; ".join(str(error.get("msg", "")) for error in exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "errorMessage": f"طلب غير صالح: {messages}"},
    )


# === Routers ===
for router in routers:
    app.include_router(router)


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to File Merger API"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "File Merger API is running"}
