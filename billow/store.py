"""
Receipt Store — durable, owner-scoped receipt persistence.

Every query filters on ``user_id`` in SQL; callers never post-filter.
Listings are newest first, ties broken by ``id`` so the order is stable
even when two inserts share a timestamp.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from billow.database import Database
from billow.errors import StorageError
from billow.models.receipt import ReceiptModel
from billow.schemas import ReceiptRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReceiptStore:
    def __init__(self, database: Database, clock: Callable[[], datetime] = utc_now):
        self.database = database
        self.clock = clock

    def open(self) -> None:
        self.database.open()

    def close(self) -> None:
        self.database.close()

    # ── writes ───────────────────────────────────────────────────────────
    def insert(self, owner_id: int, filename: str, text: str) -> ReceiptRecord:
        db = self.database.session()
        try:
            row = ReceiptModel(
                user_id=owner_id,
                filename=filename,
                text=text,
                created_at=self.clock(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            record = ReceiptRecord.model_validate(row)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Receipt insert failed for user %s", owner_id)
            raise StorageError("DB insert failed") from exc
        finally:
            db.close()

        logger.info("Stored receipt %s for user %s", record.id, owner_id)
        return record

    # ── reads ────────────────────────────────────────────────────────────
    def list_by_owner(self, owner_id: int) -> list[ReceiptRecord]:
        return self._select(owner_id, None)

    def list_by_owner_matching(self, owner_id: int, query: Optional[str]) -> list[ReceiptRecord]:
        if not query:
            return self.list_by_owner(owner_id)
        return self._select(owner_id, query)

    def _select(self, owner_id: int, query: Optional[str]) -> list[ReceiptRecord]:
        db = self.database.session()
        try:
            q = db.query(ReceiptModel).filter(ReceiptModel.user_id == owner_id)
            if query:
                # instr() is a plain case-sensitive substring test; LIKE would
                # case-fold ASCII on SQLite and treat % and _ as wildcards.
                q = q.filter(func.instr(ReceiptModel.text, query) > 0)
            rows = (
                q.order_by(ReceiptModel.created_at.desc(), ReceiptModel.id.desc())
                .all()
            )
            return [ReceiptRecord.model_validate(r) for r in rows]
        except SQLAlchemyError as exc:
            logger.exception("Receipt query failed for user %s", owner_id)
            message = "DB search failed" if query else "DB query failed"
            raise StorageError(message) from exc
        finally:
            db.close()
