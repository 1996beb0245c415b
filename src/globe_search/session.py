"""Per-request protocol sessions.

Every protocol request gets its own low-level server and its own stateless
streamable HTTP transport. The pair lives for exactly one HTTP exchange and is
torn down when the exchange ends, however it ends.
"""

from __future__ import annotations

import logging
from typing import Any

import anyio
from anyio.abc import TaskStatus
from mcp.server.lowlevel import Server
from mcp.server.streamable_http import StreamableHTTPServerTransport
from starlette.responses import PlainTextResponse
from starlette.types import Message, Receive, Scope, Send

from globe_search.registry import Registry
from globe_search.server import create_server

logger = logging.getLogger(__name__)


class Session:
    """One protocol server bound to one transport for a single HTTP exchange.

    Args:
        server: the protocol server dispatching tool and resource requests
        transport: the transport translating the HTTP exchange into protocol messages
    """

    def __init__(self, server: Server[Any, Any], transport: StreamableHTTPServerTransport):
        self.server = server
        self.transport = transport
        self._server_scope: anyio.CancelScope | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def _run_server(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        with anyio.CancelScope() as scope:
            self._server_scope = scope
            async with self.transport.connect() as (read_stream, write_stream):
                task_status.started()
                try:
                    await self.server.run(
                        read_stream,
                        write_stream,
                        self.server.create_initialization_options(),
                        stateless=True,
                    )
                except Exception:
                    logger.exception("Protocol server crashed")

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Connect the server to the transport and let the transport answer the request.

        The session is closed when this returns or raises.
        """
        if self._closed:
            raise RuntimeError("Session is closed")
        async with anyio.create_task_group() as tg:
            try:
                await tg.start(self._run_server)
                await self.transport.handle_request(scope, receive, send)
            finally:
                # the server task only exits once the transport is released
                await self.close()

    async def close(self) -> None:
        """Release the transport, then the server. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing session")
        with anyio.CancelScope(shield=True):
            await self.transport.terminate()
        if self._server_scope is not None:
            self._server_scope.cancel()


def create_session(registry: Registry) -> Session:
    """Create a fresh server and a stateless, JSON-responding transport."""
    server = create_server(registry)
    transport = StreamableHTTPServerTransport(
        mcp_session_id=None,
        is_json_response_enabled=True,
    )
    logger.debug("Created session")
    return Session(server, transport)


async def serve_protocol_request(registry: Registry, scope: Scope, receive: Receive, send: Send) -> None:
    """Answer one protocol request with a new session.

    Any failure while connecting or handling is logged and, if the response has
    not been started yet, answered with a 500.
    """
    response_started = False

    async def tracking_send(message: Message) -> None:
        nonlocal response_started
        if message["type"] == "http.response.start":
            response_started = True
        await send(message)

    session = create_session(registry)
    try:
        await session.handle(scope, receive, tracking_send)
    except Exception:
        logger.exception("Error handling MCP request")
        if not response_started:
            response = PlainTextResponse("Internal server error", status_code=500)
            await response(scope, receive, send)
    finally:
        await session.close()
