# =============================================================================
# tools/mcp_server.py  -  FastMCP server in front of the ToolRegistry
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes every ToolDefinition in the registry as an MCP tool, and
#   forwards each call to ToolRegistry.invoke().  It owns no tool logic:
#   schemas, handlers and envelopes all live in core/.
#
# HOW IT WORKS (the flow):
#   1. The agent lists tools: it sees each tool's identifier, description
#      and input schema (the ObjectSchema rendered as JSON Schema)
#   2. It calls a tool by identifier, e.g. "add-to-notion"
#   3. RegistryTool.run() builds a CallerIdentity + InvocationContext from
#      the MCP request and passes the raw arguments to registry.invoke()
#   4. The ResultEnvelope {text, data, ui} goes back as the tool result
#
# ERRORS:
#   UnknownTool / InvalidInput are the caller's fault -> ToolError, with the
#   full list of field failures in the message.  ExternalCallFailed is left
#   alone; FastMCP reports it as a failed tool call.
#
# RUNNING THIS SERVER:
#     a) stdio (default, how the demo agent connects):  python -m tools.mcp_server
#     b) HTTP on port 2022:  FLOW_PILOT_TRANSPORT=streamable-http python -m tools.mcp_server
# =============================================================================

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.dependencies import get_context
from fastmcp.tools import Tool, ToolResult
from pydantic import Field
from pydantic.json_schema import SkipJsonSchema

from core.catalog import DEFAULT_ENDPOINTS, SERVICE_METADATA, build_registry
from core.config import load_settings
from core.errors import InvalidInput, UnknownTool
from core.models import CallerIdentity, InvocationContext, ServiceMetadata, ToolDefinition
from core.registry import ToolRegistry

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP JSON
# stream and anything else written there corrupts it.
#
#   CYAN   -> incoming requests (tool + arguments)
#   YELLOW -> intermediate status
#   GREEN  -> response JSON
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'), ensure_ascii=False)}{_RESET}")
    return result


# =============================================================================
# Registry-backed tools
# =============================================================================
# Each ToolDefinition is published as a RegistryTool: the advertised input
# schema is the definition's own JSON schema, and the raw arguments dict is
# handed to registry.invoke() untouched.  The registry is the only
# validator, so extra fields are ignored and a rejected call lists every
# failing field.
# =============================================================================
def invocation_scope(ctx: Context | None) -> tuple[CallerIdentity, InvocationContext]:
    """Caller and per-call context for one MCP request."""
    if ctx is None:
        return CallerIdentity(id="anonymous"), InvocationContext.new()
    try:
        trace_id = str(ctx.request_id)
    except RuntimeError:
        trace_id = None
    caller = CallerIdentity(id=ctx.client_id or "anonymous", profile={"transport": "mcp"})
    return caller, InvocationContext.new(trace_id=trace_id)


def _active_context() -> Context | None:
    try:
        return get_context()
    except RuntimeError:
        return None


async def call_registry(
    registry: ToolRegistry,
    identifier: str,
    arguments: dict[str, Any] | None,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Invoke one tool for an MCP caller and return the envelope as a dict.

    Raises:
        ToolError: Unknown tool or rejected input; the message carries the
            registry's field-level failures.
        ExternalCallFailed: Propagated; FastMCP reports it as a failed call.
    """
    caller, context = invocation_scope(ctx)
    _log_request(identifier, arguments or {})

    try:
        envelope = await registry.invoke(identifier, arguments, caller, context)
    except (UnknownTool, InvalidInput) as exc:
        _log_status(f"rejected: {exc}")
        raise ToolError(str(exc)) from exc

    _log_status(envelope.text)
    return _log_response(identifier, envelope.to_dict())


class RegistryTool(Tool):
    """An MCP tool that forwards its raw arguments to a ToolRegistry."""

    registry: SkipJsonSchema[Any] = Field(exclude=True)

    @classmethod
    def from_definition(cls, registry: ToolRegistry, definition: ToolDefinition) -> RegistryTool:
        return cls(
            name=definition.identifier,
            title=definition.name,
            description=definition.description,
            parameters=definition.input_schema.to_json_schema(),
            registry=registry,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        result = await call_registry(self.registry, self.name, arguments, _active_context())
        return ToolResult(
            content=json.dumps(result, ensure_ascii=False),
            structured_content=result,
        )


# =============================================================================
# Server construction
# =============================================================================
def create_server(registry: ToolRegistry, metadata: ServiceMetadata = SERVICE_METADATA) -> FastMCP:
    """Create a FastMCP server exposing every tool in ``registry``.

    Besides the tools, two resources describe the service to agents:
      - catalog://tools    -> identifiers, schemas and pricing of every tool
      - catalog://service  -> title, version, tags and example queries
    """
    mcp = FastMCP(metadata.title, instructions=metadata.description)

    for definition in registry.list():
        mcp.add_tool(RegistryTool.from_definition(registry, definition))

    @mcp.resource("catalog://tools", mime_type="application/json")
    def tool_catalog() -> str:
        """Every tool's identifier, schemas and pricing, in catalog order."""
        return json.dumps(registry.catalog(), indent=2)

    @mcp.resource("catalog://service", mime_type="application/json")
    def service_info() -> str:
        """Service title, version, tags and example queries."""
        return json.dumps(metadata.to_dict(), indent=2)

    return mcp


def main() -> None:
    settings = load_settings(tuple(DEFAULT_ENDPOINTS))
    configure_logging(settings.log_level)
    settings.require_api_key()

    registry = build_registry(settings=settings)
    server = create_server(registry)
    _log_status(f"{len(registry)} tools registered: {', '.join(t.identifier for t in registry)}")

    if settings.transport == "stdio":
        server.run()
    else:
        logger.info("%s is running on port %s", SERVICE_METADATA.title, settings.port)
        server.run(transport=settings.transport, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
