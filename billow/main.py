"""
Billow backend — FastAPI application entry‑point.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from billow import __version__
from billow.config import settings
from billow.database import Database
from billow.errors import BillowError, MalformedRequest
from billow.pipeline import (
    BlobStore,
    IngestionPipeline,
    RecognitionAdapter,
    RetrievalService,
    tesseract_engine,
)
from billow.schemas import ErrorResponse
from billow.store import ReceiptStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure data dirs + tables exist
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.upload_dir, exist_ok=True)

    database = Database(settings.database_url, echo=settings.DEBUG)
    store = ReceiptStore(database)
    store.open()

    recognizer = RecognitionAdapter(
        tesseract_engine(lang=settings.OCR_LANG, timeout=settings.OCR_TIMEOUT)
    )
    app.state.database = database
    app.state.pipeline = IngestionPipeline(
        BlobStore(settings.upload_dir),
        recognizer,
        store,
        max_upload_bytes=settings.MAX_UPLOAD_BYTES,
    )
    app.state.retrieval = RetrievalService(store)
    logger.info("Billow ready (uploads: %s)", settings.upload_dir)

    yield

    store.close()
    logger.info("Shutting down")


app = FastAPI(
    title="Billow",
    description="Receipt image → OCR text → owner-scoped search",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie="billow_session",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers ───────────────────────────────────────────────────────
@app.exception_handler(BillowError)
async def billow_error_handler(request: Request, exc: BillowError):
    body = ErrorResponse(error=exc.message, reason=exc.reason)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return await billow_error_handler(request, MalformedRequest())


@app.get("/")
async def root():
    return {"service": "Billow", "version": __version__, "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# ── Register API routers ─────────────────────────────────────────────────
from billow.routers.auth import router as auth_router  # noqa: E402
from billow.routers.receipts import router as receipts_router  # noqa: E402

app.include_router(auth_router, tags=["Accounts"])
app.include_router(receipts_router, tags=["Receipts"])


def run():
    import uvicorn

    uvicorn.run("billow.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
