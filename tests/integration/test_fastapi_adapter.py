"""Integration tests for the FastAPI access-log installer."""

import json

import pytest

fastapi = pytest.importorskip("fastapi")

from flatlog.adapters.frameworks.fastapi import instrument_app  # noqa: E402
from flatlog.core.models import FormatMode  # noqa: E402

pytestmark = pytest.mark.integration


def _create_app() -> "fastapi.FastAPI":
    app = fastapi.FastAPI()

    @app.get("/items/{item_id}")
    async def read_item(item_id: int) -> dict:
        return {"item_id": item_id}

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


@pytest.mark.asyncio
async def test_requests_are_logged(make_logger, streams, asgi_test_client):
    app = instrument_app(_create_app(), make_logger(format_mode=FormatMode.JSON))

    async with asgi_test_client(app) as client:
        response = await client.get("/items/3", headers={"X-Forwarded-For": "1.2.3.4"})

    assert response.status_code == 200
    event = json.loads(streams[0].getvalue())
    assert event["event"]["req_url_path"] == "/items/3"
    assert event["event"]["req_status"] == 200
    assert event["event"]["req_x_fwd_for"] == "1.2.3.4"


@pytest.mark.asyncio
async def test_exempt_paths_are_skipped(make_logger, streams, asgi_test_client):
    app = instrument_app(
        _create_app(), make_logger(), exempt_paths=["/health"]
    )

    async with asgi_test_client(app) as client:
        await client.get("/health")
        await client.get("/items/1")

    lines = streams[0].getvalue().splitlines()
    assert len(lines) == 1
    assert '"event_req_url_path"="/items/1"' in lines[0]
