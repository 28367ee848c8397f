"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptvault import __version__
from promptvault.config import settings
from promptvault.database import init_db
from promptvault.routers import prompts, tags, transfer, versions
from promptvault.services.exceptions import StorageFailure

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database ready (%s)", settings.database_url)
    yield


app = FastAPI(
    title="PromptVault",
    description="Versioned prompt templates with {{variable}} resolution",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc.__cause__)
    return JSONResponse(
        status_code=503,
        content={"detail": str(exc), "retryable": True},
        headers={"Retry-After": "1"},
    )


# Mount routers
app.include_router(prompts.router, prefix="/api/prompts", tags=["prompts"])
app.include_router(versions.router, prefix="/api/prompts", tags=["versions"])
app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
app.include_router(transfer.router, prefix="/api/transfer", tags=["transfer"])


@app.get("/health")
async def health():
    return {"status": "ok", "service": "promptvault", "version": __version__}
