"""
relocation_api/main.py  ── Relocation & Travel Decision Engine
Fuses five public data sources into three explainable 0–100 scores per
country and ranks the candidates for a traveller's risk tolerance and stay
duration. Country datasets are cached in memory for 60 minutes.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

import pytz
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relocation_api.core.cache import country_cache
from relocation_api.core.config import LOG_LEVEL, PORT
from relocation_api.core.http_client import close_all
from relocation_api.routers import analyze

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("main")

_started_at = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("🌍 Decision Engine starting...")
    yield
    log.info("🛑 Shutting down...")
    await close_all()


app = FastAPI(
    title="Relocation & Travel Decision Engine",
    description=(
        "Ranks countries for relocation or travel. "
        "Sources: REST Countries (profile) + World Bank (health) + "
        "OpenWeatherMap (weather) + WAQI (air quality) + "
        "travel-advisory.info (advisories). "
        "Per-country data cached 60 min with in-flight deduplication."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "-"
    log.info(f"{request.method} {request.url.path} from {client}")
    return await call_next(request)


# ── Error envelope ───────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    """Unparseable bodies get the same 400 envelope as failed validation."""
    log.info(f"Malformed body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "errors": ["Request body must be valid JSON."]},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"success": False, "message": "Route not found."})
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error."})


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(analyze.router)


@app.get("/", tags=["meta"])
async def root():
    return {
        "status":  "online",
        "version": "1.0.0",
        "sources": {
            "profile":     "REST Countries v3",
            "health":      "World Bank (life expectancy, health expenditure % GDP)",
            "weather":     "OpenWeatherMap (capital city, current)",
            "air_quality": "WAQI (capital city)",
            "advisory":    "travel-advisory.info",
        },
        "endpoints": {
            "analyze": "POST /api/analyze",
            "health":  "/health",
            "docs":    "/docs",
        },
    }


@app.get("/health", tags=["meta"])
async def health():
    """Lightweight health check with cache counters."""
    return {
        "status":         "ok",
        "cache":          country_cache.stats(),
        "uptime_seconds": int(time.time() - _started_at),
        "timestamp":      datetime.now(pytz.utc).isoformat(),
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
