"""kinship — relationship calculator service for family-tree apps."""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from contextlib import asynccontextmanager
from threading import Lock

import psutil
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger("kinship")

HOST = os.environ.get("KIN_HOST", "127.0.0.1")
PORT = int(os.environ.get("KIN_PORT", "9820"))
LOG_LEVEL = os.environ.get("KIN_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    o.strip() for o in os.environ.get("KIN_CORS_ORIGINS", "*").split(",") if o.strip()
]

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# ---------------------------------------------------------------------------
# Request rate
# ---------------------------------------------------------------------------

class RateCounter:
    """Requests seen in the last ``window`` seconds.

    Expired timestamps are dropped on every write as well as every read, so
    the deque never holds more than one window's worth of requests.
    """

    def __init__(self, window: float = 60.0) -> None:
        self._window = window
        self._lock = Lock()
        self._timestamps: deque[float] = deque()

    def record(self) -> None:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            self._timestamps.append(now)

    def _prune(self, now: float) -> None:
        # caller holds the lock
        cutoff = now - self._window
        while self._timestamps and self._timestamps[0] < cutoff:
            self._timestamps.popleft()

    def count(self) -> int:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            return len(self._timestamps)

    def rate(self) -> float:
        return self.count() / self._window if self._window else 0.0


request_counter = RateCounter(window=60.0)
_start_time: float = 0.0


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    global _start_time
    _start_time = time.time()
    logger.info("Kinship service started (log level %s)", LOG_LEVEL)

    yield

    logger.info("Kinship service stopped")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="kinship",
    version="0.1.0",
    description="Kinship relationship calculator for family-tree graphs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request counting middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def count_requests(request: Request, call_next):
    request_counter.record()
    return await call_next(request)


# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------

from kinship.calculator.routes import query_stats  # noqa: E402
from kinship.calculator.routes import router as kinship_router  # noqa: E402

app.include_router(kinship_router)


# ---------------------------------------------------------------------------
# Core routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    """Uptime, memory, request rate and served-query counters."""
    try:
        rss = psutil.Process(os.getpid()).memory_info().rss
    except psutil.Error as exc:
        logger.exception("Error reading process memory")
        return JSONResponse(status_code=500, content={"error": f"Metrics error: {exc}"})

    return {
        "uptime_seconds": round(time.time() - _start_time) if _start_time else 0,
        "memory_rss_mb": round(rss / 1_048_576, 1),
        "requests_per_second": round(request_counter.rate(), 2),
        **query_stats,
    }


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run() -> None:
    uvicorn.run("kinship.app:app", host=HOST, port=PORT, reload=False)


if __name__ == "__main__":
    run()
