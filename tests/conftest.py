"""
Shared pytest fixtures — in‑memory SQLite, temp upload dir, fake OCR engine,
FastAPI TestClient.
"""
import contextlib
import os
import tempfile

# Settings are read at import time; keep test runs out of ./data and make
# bcrypt cheap.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="billow-test-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from billow.database import Base, Database  # noqa: E402
from billow.deps import get_database, get_pipeline, get_retrieval  # noqa: E402
from billow.main import app  # noqa: E402
from billow.pipeline import (  # noqa: E402
    BlobStore,
    IngestionPipeline,
    RecognitionAdapter,
    RetrievalService,
)
from billow.store import ReceiptStore  # noqa: E402


class FakeEngine:
    """OCR stand-in: maps image bytes to canned text, raises on demand."""

    def __init__(self, texts=None):
        self.texts = dict(texts or {})
        self.calls = []

    def __call__(self, image_bytes: bytes) -> str:
        self.calls.append(image_bytes)
        result = self.texts.get(image_bytes, "")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture()
def database():
    # StaticPool ensures all connections share the same in-memory database
    db = Database(
        "sqlite:///:memory:",
        poolclass=StaticPool,
    )
    db.open()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.close()


@pytest.fixture()
def store(database):
    return ReceiptStore(database)


@pytest.fixture()
def engine():
    return FakeEngine()


@pytest.fixture()
def blobs(tmp_path):
    return BlobStore(tmp_path / "uploads")


@pytest.fixture()
def pipeline(blobs, engine, store):
    return IngestionPipeline(blobs, RecognitionAdapter(engine), store, max_upload_bytes=1024)


@pytest.fixture()
def retrieval(store):
    return RetrievalService(store)


@pytest.fixture()
def make_client(database, pipeline, retrieval):
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_retrieval] = lambda: retrieval

    opened = []

    def _make():
        c = TestClient(app)
        c.__enter__()
        opened.append(c)
        return c

    yield _make

    for c in opened:
        c.__exit__(None, None, None)
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client):
    return make_client()


@pytest.fixture()
def login():
    """Register (if needed) and log a client in; returns the client."""

    def _login(client, email, password="hunter22"):
        client.post("/register", json={"email": email, "password": password})
        resp = client.post("/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return client

    return _login


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def failing_inserts(database):
    """Context manager under which every INSERT into receipts fails."""

    def _fail(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("INSERT INTO RECEIPTS"):
            raise OperationalError(statement, parameters, Exception("database is locked"))

    @contextlib.contextmanager
    def _failing():
        event.listen(database.engine, "before_cursor_execute", _fail)
        try:
            yield
        finally:
            event.remove(database.engine, "before_cursor_execute", _fail)

    return _failing
