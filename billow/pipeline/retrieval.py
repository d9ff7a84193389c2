"""
Retrieval service — owner-scoped listing and substring search.
"""
from __future__ import annotations

import logging
from typing import Optional

from billow.errors import Unauthenticated
from billow.schemas import ReceiptRecord
from billow.store import ReceiptStore

logger = logging.getLogger(__name__)


class RetrievalService:
    def __init__(self, store: ReceiptStore):
        self.store = store

    def list(self, owner_id: Optional[int], query: Optional[str] = None) -> list[ReceiptRecord]:
        if owner_id is None:
            raise Unauthenticated()
        rows = self.store.list_by_owner_matching(owner_id, query)
        logger.info("Found %d receipts for user %s (q=%r)", len(rows), owner_id, query)
        return rows
