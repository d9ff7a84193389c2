"""
Ingestion pipeline.

Orchestrates: validate → store binary → recognize → commit.

Blocking work (disk write, OCR, SQL) is pushed to the thread pool so a
request waiting on Tesseract never holds up other requests.  Validation
errors short-circuit before any side effect; a failed commit removes the
binary it just wrote so no orphan is left behind.
"""
from __future__ import annotations

import enum
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from billow.errors import (
    BinaryWriteError,
    NoFileAttached,
    StorageError,
    Unauthenticated,
    UploadTooLarge,
)
from billow.pipeline.blobs import BlobStore
from billow.pipeline.recognizer import RecognitionAdapter
from billow.schemas import IngestResponse, UploadRequest
from billow.store import ReceiptStore

logger = logging.getLogger(__name__)


class IngestStage(str, enum.Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    STORED = "stored"
    RECOGNIZED = "recognized"
    COMMITTED = "committed"
    REJECTED = "rejected"
    FAILED = "failed"


class IngestionPipeline:
    def __init__(
        self,
        blobs: BlobStore,
        recognizer: RecognitionAdapter,
        store: ReceiptStore,
        max_upload_bytes: Optional[int] = None,
    ):
        self.blobs = blobs
        self.recognizer = recognizer
        self.store = store
        self.max_upload_bytes = max_upload_bytes

    def validate(self, owner_id: Optional[int], upload: Optional[UploadRequest]) -> UploadRequest:
        if owner_id is None:
            raise Unauthenticated()
        if upload is None or not upload.filename.strip():
            raise NoFileAttached()
        self.check_size(upload.size)
        return upload

    def check_size(self, size: Optional[int]) -> None:
        if self.max_upload_bytes is not None and size is not None and size > self.max_upload_bytes:
            raise UploadTooLarge(
                f"Uploaded file exceeds {self.max_upload_bytes} bytes"
            )

    async def ingest(
        self, owner_id: Optional[int], upload: Optional[UploadRequest]
    ) -> IngestResponse:
        _log_stage(IngestStage.RECEIVED, owner_id, upload.filename if upload else None)
        try:
            upload = self.validate(owner_id, upload)
        except (Unauthenticated, NoFileAttached, UploadTooLarge) as exc:
            _log_stage(IngestStage.REJECTED, owner_id, None, exc.reason)
            raise
        _log_stage(IngestStage.VALIDATED, owner_id, upload.filename)

        try:
            path = await run_in_threadpool(self.blobs.save, upload.filename, upload.content)
        except OSError as exc:
            logger.exception("Could not write upload %r", upload.filename)
            _log_stage(IngestStage.FAILED, owner_id, upload.filename, BinaryWriteError.reason)
            raise BinaryWriteError() from exc
        _log_stage(IngestStage.STORED, owner_id, upload.filename)

        text = await run_in_threadpool(self.recognizer.recognize, upload.content)
        _log_stage(IngestStage.RECOGNIZED, owner_id, upload.filename)

        try:
            record = await run_in_threadpool(self.store.insert, owner_id, upload.filename, text)
        except StorageError:
            _log_stage(IngestStage.FAILED, owner_id, upload.filename, StorageError.reason)
            await run_in_threadpool(self._discard, path)
            raise
        _log_stage(IngestStage.COMMITTED, owner_id, upload.filename)

        logger.info("Receipt %s committed (%d chars)", record.id, len(text))
        return IngestResponse(text=text)

    def _discard(self, path) -> None:
        try:
            self.blobs.delete(path)
        except OSError:
            logger.warning("Could not remove orphaned upload %s", path, exc_info=True)


def _log_stage(stage: IngestStage, owner_id, filename, reason: Optional[str] = None) -> None:
    if reason:
        logger.info("Ingest %s: user=%s file=%r reason=%s", stage.value, owner_id, filename, reason)
    else:
        logger.info("Ingest %s: user=%s file=%r", stage.value, owner_id, filename)
