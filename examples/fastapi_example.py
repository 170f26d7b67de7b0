"""Example FastAPI application with flatlog access logging.

Run with:
    uvicorn examples.fastapi_example:app --reload

Every request except /health is written as one INFO event to stdout.
Set FORMAT=json in the environment to switch from KVP to JSON lines.
"""

import os

from fastapi import FastAPI

from flatlog import new_logger, with_message, with_payload
from flatlog.adapters.frameworks.fastapi import instrument_app

log = new_logger(
    app="fastapi-example",
    format_mode=os.environ.get("FORMAT", "kvp"),
    threshold=os.environ.get("LOG_LEVEL", "info"),
    exempt_paths=["/health"],
)

app = FastAPI(title="flatlog example")
instrument_app(app, log)


@app.get("/")
async def root() -> dict:
    log.debug("serving root")
    return {"message": "Hello World"}


@app.get("/orders/{order_id}")
async def order(order_id: int) -> dict:
    log.info(
        with_message("order looked up"),
        with_payload({"order": {"id": order_id, "lines": [{"sku": "A-1", "qty": 2}]}}),
    )
    return {"order_id": order_id}


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
