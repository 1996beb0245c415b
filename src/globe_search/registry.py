"""Capability registry: the one tool and one resource this server offers.

The registry is built once at startup from the loaded widget assets and is
read-only afterwards, so every session can share it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from mcp import types
from mcp.server.lowlevel.helper_types import ReadResourceContents

from globe_search import tools
from globe_search.assets import WidgetAssets

logger = logging.getLogger(__name__)

WIDGET_URI = "ui://widget/search.html"
WIDGET_NAME = "search-widget"
WIDGET_MIME_TYPE = "text/html+skybridge"


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    title: str
    description: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any] | None
    meta: dict[str, Any]
    handler: Callable[[Mapping[str, Any] | None], tools.Reply] = field(repr=False)
    validate: Callable[[Mapping[str, Any] | None], None] = field(repr=False)

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_schema,
            outputSchema=self.output_schema,
            _meta=self.meta,
        )


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    mime_type: str
    body: str = field(repr=False)
    meta: dict[str, Any]

    def to_resource(self) -> types.Resource:
        return types.Resource(uri=self.uri, name=self.name, mimeType=self.mime_type, _meta=self.meta)

    def read(self) -> list[ReadResourceContents]:
        return [ReadResourceContents(content=self.body, mime_type=self.mime_type, meta=self.meta)]


@dataclass(frozen=True)
class NotFound:
    """Lookup result for a tool name or resource URI the registry does not know."""

    kind: Literal["tool", "resource"]
    key: str

    @property
    def message(self) -> str:
        if self.kind == "tool":
            return f"Unknown tool: {self.key}"
        return f"Resource {self.key} not found"


class Registry:
    """Fixed mapping from tool names and resource URIs to their descriptors."""

    def __init__(self, tool_descriptors: list[ToolDescriptor], resource_descriptors: list[ResourceDescriptor]):
        self._tools = MappingProxyType({t.name: t for t in tool_descriptors})
        self._resources = MappingProxyType({r.uri: r for r in resource_descriptors})

    @property
    def tools(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    @property
    def resources(self) -> list[ResourceDescriptor]:
        return list(self._resources.values())

    def tool(self, name: str) -> ToolDescriptor | NotFound:
        descriptor = self._tools.get(name)
        if descriptor is None:
            logger.warning("Unknown tool requested: %s", name)
            return NotFound("tool", name)
        return descriptor

    def resource(self, uri: str) -> ResourceDescriptor | NotFound:
        descriptor = self._resources.get(uri)
        if descriptor is None:
            logger.warning("Unknown resource requested: %s", uri)
            return NotFound("resource", uri)
        return descriptor


def create_registry(assets: WidgetAssets) -> Registry:
    search_tool = ToolDescriptor(
        name=tools.TOOL_NAME,
        title="Search Boston Globe articles",
        description="Configures the Boston Globe search query and result size for the widget to fetch.",
        input_schema=tools.SEARCH_INPUT_SCHEMA,
        output_schema=tools.SEARCH_OUTPUT_SCHEMA,
        meta={
            "openai/outputTemplate": WIDGET_URI,
            "openai/toolInvocation/invoking": "Choosing search query…",
            "openai/toolInvocation/invoked": "Updated search query.",
        },
        handler=tools.search_articles,
        validate=tools.validate_arguments,
    )
    widget = ResourceDescriptor(
        uri=WIDGET_URI,
        name=WIDGET_NAME,
        mime_type=WIDGET_MIME_TYPE,
        body=assets.body,
        meta={"openai/widgetPrefersBorder": True},
    )
    return Registry([search_tool], [widget])
