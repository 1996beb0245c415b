"""Binds the capability registry to a low-level MCP server."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import jsonschema
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from globe_search.registry import NotFound, Registry
from globe_search.settings import SERVER_NAME, SERVER_VERSION

logger = logging.getLogger(__name__)


def _error_result(message: str) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=message)], isError=True)


def create_server(registry: Registry) -> Server[Any, Any]:
    """Create a protocol server exposing the registry's tool and resource.

    Argument validation is done here rather than by the SDK so that a blank
    query reaches the tool handler and gets a readable reply.
    """
    server: Server[Any, Any] = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [descriptor.to_tool() for descriptor in registry.tools]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        logger.debug("Calling tool %s", name)
        descriptor = registry.tool(name)
        if isinstance(descriptor, NotFound):
            return _error_result(descriptor.message)
        try:
            descriptor.validate(arguments)
        except jsonschema.ValidationError as e:
            return _error_result(f"Input validation error: {e.message}")
        return descriptor.handler(arguments).to_result()

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [descriptor.to_resource() for descriptor in registry.resources]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return []

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        descriptor = registry.resource(str(uri))
        if isinstance(descriptor, NotFound):
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=descriptor.message))
        return descriptor.read()

    return server
