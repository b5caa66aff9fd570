"""POST /api/v1/documents: end-to-end tests through the ASGI app.

Tests cover:
    - the example scenario: response shape, PDF text, LogRecord origin/content
    - placeholder for missing, non-string and malformed input
    - N concurrent requests → N distinct identifiers and files
    - unreachable log store → still success
    - unwritable artifact directory → error response without a file name
    - text outside the core font still yields a document
    - a cancelled request still finishes its log write and artifact write
    - a pool bound of 1 serialises concurrent requests without errors
"""

import asyncio
import json

import pytest
from fastapi import Request
from httpx import ASGITransport, AsyncClient

from pdfsmith.api.routes.documents import create_document
from pdfsmith.infrastructure.database import ConnectionPool
from pdfsmith.services.document_generator import PdfDocumentGenerator
from tests.api.helpers import ORIGIN, SlowGenerator, build_app, fetch_logs

URL = "/api/v1/documents"


async def test_create_document_example_scenario(client, pool, artifact_dir):
    res = await client.post(URL, json={"text": "hello"})

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "pdf_created"
    assert set(body) == {"status", "file"}

    pdf = artifact_dir / body["file"]
    assert pdf.exists()
    assert b"hello" in pdf.read_bytes()

    rows = await fetch_logs(pool)
    assert [(r.origin_address, r.content) for r in rows] == [(ORIGIN, "hello")]


async def test_empty_object_uses_placeholder(client, pool, artifact_dir):
    res = await client.post(URL, json={})

    assert res.status_code == 200
    assert b"No Content" in (artifact_dir / res.json()["file"]).read_bytes()
    rows = await fetch_logs(pool)
    assert rows[0].content == "No Content"


async def test_non_string_text_uses_placeholder(client, pool):
    res = await client.post(URL, json={"text": 42})

    assert res.status_code == 200
    assert (await fetch_logs(pool))[0].content == "No Content"


async def test_malformed_json_degrades_to_placeholder(client, pool):
    res = await client.post(
        URL, content=b"{not json", headers={"content-type": "application/json"},
    )

    assert res.status_code == 200
    assert res.json()["status"] == "pdf_created"
    assert (await fetch_logs(pool))[0].content == "No Content"


async def test_empty_body_degrades_to_placeholder(client, pool):
    res = await client.post(URL)
    assert res.status_code == 200
    assert (await fetch_logs(pool))[0].content == "No Content"


async def test_origin_comes_from_transport_not_body(client, pool):
    await client.post(URL, json={"text": "x", "originAddress": "10.9.9.9"})
    assert (await fetch_logs(pool))[0].origin_address == ORIGIN


async def test_concurrent_requests_get_distinct_identifiers(client, artifact_dir):
    responses = await asyncio.gather(
        *(client.post(URL, json={"text": f"doc {i}"}) for i in range(20)),
    )

    assert all(r.status_code == 200 for r in responses)
    files = {r.json()["file"] for r in responses}
    assert len(files) == 20
    assert {p.name for p in artifact_dir.glob("*.pdf")} == files


async def test_unreachable_store_still_succeeds(unreachable_url, artifact_dir):
    dead_pool = ConnectionPool(unreachable_url)
    app = build_app(dead_pool, PdfDocumentGenerator(artifact_dir, compress=False))
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            res = await c.post(URL, json={"text": "still works"})
    finally:
        await dead_pool.dispose()

    assert res.status_code == 200
    pdf = artifact_dir / res.json()["file"]
    assert b"still works" in pdf.read_bytes()


async def test_unwritable_artifact_dir_returns_error(pool, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    app = build_app(pool, PdfDocumentGenerator(blocker / "sub"))

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.post(URL, json={"text": "hello"})

    assert res.status_code == 500
    body = res.json()
    assert "file" not in body
    assert body["error"]["code"] == "ARTIFACT_ERROR"
    assert str(blocker) not in res.text


async def test_text_outside_core_font_still_succeeds(client, pool, artifact_dir):
    text = "\u201cdon\u2019t\u201d \u2014 \u20ac5 \U0001F600"
    res = await client.post(URL, json={"text": text})

    assert res.status_code == 200
    assert (artifact_dir / res.json()["file"]).exists()
    assert (await fetch_logs(pool))[0].content == text


async def test_client_disconnect_does_not_cancel_writes(pool, artifact_dir):
    generator = SlowGenerator(PdfDocumentGenerator(artifact_dir, compress=False), 0.3)
    app = build_app(pool, generator)
    request = Request({
        "type": "http", "method": "POST", "path": URL, "headers": [],
        "query_string": b"", "client": (ORIGIN, 51000), "app": app,
    })
    request._body = json.dumps({"text": "disconnected"}).encode()

    task = asyncio.create_task(
        create_document(request, handler=app.state.request_handler),
    )
    await generator.started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    await asyncio.wait_for(generator.finished.wait(), timeout=5)
    assert len(list(artifact_dir.glob("*.pdf"))) == 1
    rows = await fetch_logs(pool)
    assert [(r.origin_address, r.content) for r in rows] == [(ORIGIN, "disconnected")]


async def test_pool_bound_of_one_serialises_without_errors(sqlite_url, artifact_dir):
    small_pool = ConnectionPool(sqlite_url, max_connections=1, acquire_timeout_seconds=10)
    await small_pool.create_schema()
    app = build_app(small_pool, PdfDocumentGenerator(artifact_dir, compress=False))
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, client=(ORIGIN, 51000)),
            base_url="http://test",
        ) as c:
            first, second = await asyncio.gather(
                c.post(URL, json={"text": "one"}),
                c.post(URL, json={"text": "two"}),
            )
        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["file"] != second.json()["file"]
        rows = await fetch_logs(small_pool)
        assert sorted(r.content for r in rows) == ["one", "two"]
    finally:
        await small_pool.dispose()
