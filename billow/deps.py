"""
FastAPI dependencies.

Long-lived services are built by the application lifespan and hung on
``app.state``; routes reach them through these functions so tests can swap
them with ``app.dependency_overrides``.
"""
from fastapi import Depends, Request

from billow.accounts import current_account_id
from billow.database import Database
from billow.pipeline import IngestionPipeline, RetrievalService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)):
    """데이터베이스 세션 의존성"""
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def get_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.pipeline


def get_retrieval(request: Request) -> RetrievalService:
    return request.app.state.retrieval


__all__ = [
    "current_account_id",
    "get_database",
    "get_db",
    "get_pipeline",
    "get_retrieval",
]
