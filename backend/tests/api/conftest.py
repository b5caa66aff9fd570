"""API test fixtures: app with real pool/generator on tmp paths + httpx client.

Invariants:
    - Every test gets a fresh file-backed SQLite log store and artifact directory
    - Requests arrive from 203.0.113.7 unless a test builds its own transport
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pdfsmith.infrastructure.database import ConnectionPool
from pdfsmith.services.document_generator import PdfDocumentGenerator
from tests.api.helpers import ORIGIN, build_app


@pytest.fixture
async def pool(sqlite_url):
    p = ConnectionPool(sqlite_url, max_connections=5, acquire_timeout_seconds=10)
    await p.create_schema()
    yield p
    await p.dispose()


@pytest.fixture
def artifact_dir(tmp_path):
    d = tmp_path / "artifacts"
    d.mkdir()
    return d


@pytest.fixture
def app(pool, artifact_dir):
    return build_app(pool, PdfDocumentGenerator(artifact_dir, compress=False))


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, client=(ORIGIN, 51000)),
        base_url="http://test",
    ) as c:
        yield c
