from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest

from globe_search.app import SearchApp, create_app
from globe_search.assets import WidgetAssets, load_assets
from globe_search.registry import Registry, create_registry

PROTOCOL_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def assets() -> WidgetAssets:
    return load_assets()


@pytest.fixture
def registry(assets: WidgetAssets) -> Registry:
    return create_registry(assets)


@pytest.fixture
def app(registry: Registry) -> SearchApp:
    return create_app(registry)


@pytest.fixture
async def client(app: SearchApp) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


def jsonrpc(method: str, params: dict[str, Any] | None = None, request_id: int = 1) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def tool_call(arguments: dict[str, Any], name: str = "search_articles", request_id: int = 1) -> dict[str, Any]:
    return jsonrpc("tools/call", {"name": name, "arguments": arguments}, request_id)
