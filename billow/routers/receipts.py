"""
Receipt API endpoints.

POST /upload    — store image → OCR → save receipt, returns the text
GET  /receipts  — list the caller's receipts, newest first
GET  /search    — caller's receipts whose text contains ?q=
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from billow.deps import current_account_id, get_pipeline, get_retrieval
from billow.errors import MalformedRequest
from billow.pipeline import IngestionPipeline, RetrievalService
from billow.schemas import ErrorResponse, IngestResponse, ReceiptRecord, UploadRequest

logger = logging.getLogger(__name__)
router = APIRouter()

_ERRORS = {
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ── POST /upload ─────────────────────────────────────────────────────────
@router.post(
    "/upload",
    response_model=IngestResponse,
    responses={**_ERRORS, 400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def upload_receipt(
    request: Request,
    owner_id: Optional[int] = Depends(current_account_id),
    pipeline: IngestionPipeline = Depends(get_pipeline),
):
    """Multipart body, one file under the `receipt` field."""
    # Caller first: the body is not parsed without a session
    if owner_id is None:
        return await pipeline.ingest(None, None)

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as exc:
        raise MalformedRequest() from exc

    receipt = form.get("receipt")
    upload = None
    if isinstance(receipt, UploadFile) and receipt.filename:
        pipeline.check_size(receipt.size)
        upload = UploadRequest(filename=receipt.filename, content=await receipt.read())
    return await pipeline.ingest(owner_id, upload)


# ── GET /receipts ────────────────────────────────────────────────────────
@router.get("/receipts", response_model=list[ReceiptRecord], responses=_ERRORS)
def list_receipts(
    owner_id: Optional[int] = Depends(current_account_id),
    retrieval: RetrievalService = Depends(get_retrieval),
):
    return retrieval.list(owner_id)


# ── GET /search ──────────────────────────────────────────────────────────
@router.get("/search", response_model=list[ReceiptRecord], responses=_ERRORS)
def search_receipts(
    q: Optional[str] = Query(None, description="Case-sensitive substring"),
    owner_id: Optional[int] = Depends(current_account_id),
    retrieval: RetrievalService = Depends(get_retrieval),
):
    return retrieval.list(owner_id, q)
