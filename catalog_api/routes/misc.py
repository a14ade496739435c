"""Smoke-test endpoints mounted on both servers: GET /api/hello and POST /api/echo."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Request

from catalog_api.schemas.common import EchoResponse, HelloResponse

router = APIRouter(prefix="/api", tags=["Misc"])


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/hello", response_model=HelloResponse)
async def hello(request: Request) -> HelloResponse:
    service = request.app.state.variant
    return HelloResponse(message=f"Hello from the {service} API", timestamp=utc_now())


@router.post("/echo", response_model=EchoResponse)
async def echo(data: Any = Body(default=None)) -> EchoResponse:
    """Returns the JSON request body unchanged under `data`."""
    return EchoResponse(data=data, timestamp=utc_now())
