"""HTTP entry point: routes each request to preflight, health, protocol or 404."""

from __future__ import annotations

import enum
import logging

from starlette.datastructures import MutableHeaders
from starlette.responses import PlainTextResponse, Response
from starlette.types import Message, Receive, Scope, Send

from globe_search.registry import Registry
from globe_search.session import serve_protocol_request
from globe_search.settings import HEALTH_BANNER, MCP_PATH

logger = logging.getLogger(__name__)

PROTOCOL_METHODS = frozenset({"POST", "GET", "DELETE"})

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "content-type, mcp-session-id, mcp-protocol-version",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}

CORS_RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "Mcp-Session-Id",
}


class RouteKind(enum.Enum):
    PREFLIGHT = "preflight"
    HEALTH = "health"
    PROTOCOL = "protocol"
    NOT_FOUND = "not_found"


def classify(method: str, path: str) -> RouteKind:
    if path == MCP_PATH:
        if method == "OPTIONS":
            return RouteKind.PREFLIGHT
        if method in PROTOCOL_METHODS:
            return RouteKind.PROTOCOL
    elif path == "/" and method == "GET":
        return RouteKind.HEALTH
    return RouteKind.NOT_FOUND


class SearchApp:
    """ASGI application serving the search tool at ``/mcp``.

    The app keeps no per-request state; each protocol request gets its own session.
    """

    def __init__(self, registry: Registry):
        self.registry = registry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        path = scope.get("path")
        if not path:
            await PlainTextResponse("Missing URL", status_code=400)(scope, receive, send)
            return

        method = scope["method"]
        route = classify(method, path)
        logger.debug("%s %s -> %s", method, path, route.value)

        if route is RouteKind.PREFLIGHT:
            response: Response = Response(status_code=204, headers=PREFLIGHT_HEADERS)
        elif route is RouteKind.HEALTH:
            response = PlainTextResponse(HEALTH_BANNER)
        elif route is RouteKind.PROTOCOL:
            await serve_protocol_request(self.registry, scope, receive, _with_cors_headers(send))
            return
        else:
            response = PlainTextResponse("Not Found", status_code=404)
        await response(scope, receive, send)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _with_cors_headers(send: Send) -> Send:
    async def send_wrapper(message: Message) -> None:
        if message["type"] == "http.response.start":
            headers = MutableHeaders(scope=message)
            for name, value in CORS_RESPONSE_HEADERS.items():
                headers[name] = value
        await send(message)

    return send_wrapper


def create_app(registry: Registry) -> SearchApp:
    return SearchApp(registry)
