# =============================================================================
# core/catalog.py  -  Service assembly: metadata, endpoints, the registry
# =============================================================================
#
# build_registry() is the ONLY place a ToolRegistry is created.  The result
# is passed explicitly to whoever serves it (tools/mcp_server.py) and is
# not modified after that.
#
# ORDER MATTERS:
#   The catalog is listed in registration order, and agents see it in that
#   order, so the list below is the order tools are advertised in.
# =============================================================================

from __future__ import annotations

from collections.abc import Mapping

from core.audio import GENERATE_AUDIO, TEXT_TO_SPEECH, generate_audio_tool, text_to_speech_tool
from core.config import Settings
from core.database import query_database_tool
from core.external import ExternalCallAdapter, Poster
from core.meetings import (
    GENERATE_PRESENTATION,
    GET_MEETING_ACTION_ITEMS,
    GET_ZOOM_MEETING,
    generate_presentation_tool,
    meeting_action_items_tool,
    zoom_meeting_tool,
)
from core.models import ExampleQueryGroup, ServiceMetadata
from core.planner import ADD_TO_NOTION, CREATE_CALENDAR_EVENT, add_to_notion_tool, create_calendar_event_tool
from core.registry import ToolRegistry

SERVICE_METADATA = ServiceMetadata(
    title="Flow Pilot",
    description=(
        "A tool service providing various productivity tools for task management, "
        "meetings, and calendar events"
    ),
    version="1.0.0",
    author="Flow Pilot",
    tags=("productivity", "tasks", "calendar", "meetings"),
    logo="https://cdn-icons-png.flaticon.com/512/3281/3281289.png",
    example_queries=(
        ExampleQueryGroup(
            category="Tasks",
            queries=(
                "Add a task to Notion: Review project proposal by Friday",
                "Schedule a team meeting for tomorrow",
                "Get action items from my last meeting",
            ),
        ),
    ),
)

_LOOP_BASE = "https://magicloops.dev/api/loop"

# Tool id -> collaborator URL.  Override per tool with
# FLOW_PILOT_ENDPOINT_<TOOL_ID> (see core/config.py).
DEFAULT_ENDPOINTS: dict[str, str] = {
    GET_MEETING_ACTION_ITEMS: f"{_LOOP_BASE}/e0243b5d-0f4a-4341-a57e-33ce9dddf1ac/run",
    ADD_TO_NOTION: f"{_LOOP_BASE}/0fae0e40-97cf-42d5-bd8c-40bc1a696c32/run",
    CREATE_CALENDAR_EVENT: f"{_LOOP_BASE}/a02fc62a-a664-4e44-a2d8-79c2ac7c7779/run",
    GET_ZOOM_MEETING: f"{_LOOP_BASE}/3d16aa92-7b25-415a-ad37-b5f9a33815a6/run",
    GENERATE_PRESENTATION: f"{_LOOP_BASE}/e5b710f4-9d2e-4493-ba09-81f98eb9523b/run",
    TEXT_TO_SPEECH: f"{_LOOP_BASE}/5ce6905a-e6aa-47c7-854d-f40c5c14e1e2/run",
    GENERATE_AUDIO: f"{_LOOP_BASE}/5ce6905a-e6aa-47c7-854d-f40c5c14e1e2/run",
}


def resolve_endpoints(settings: Settings | None = None) -> dict[str, str]:
    """Default endpoints with any per-tool overrides from settings applied."""
    if settings is None:
        return dict(DEFAULT_ENDPOINTS)
    return {tool_id: settings.endpoint_for(tool_id, url) for tool_id, url in DEFAULT_ENDPOINTS.items()}


def build_registry(
    poster: Poster | None = None,
    endpoints: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> ToolRegistry:
    """Create the service's registry.

    Args:
        poster: What handlers use for external calls.  Defaults to an
            ExternalCallAdapter using the configured timeout.
        endpoints: Tool id -> URL.  Missing ids fall back to the resolved
            defaults.
        settings: Source of the timeout and endpoint overrides.

    Raises:
        DuplicateIdentifier: Two tools share an identifier.
    """
    if poster is None:
        poster = ExternalCallAdapter(timeout=settings.http_timeout if settings else None)
    urls = resolve_endpoints(settings)
    urls.update(endpoints or {})

    return ToolRegistry([
        query_database_tool(),
        meeting_action_items_tool(poster, urls[GET_MEETING_ACTION_ITEMS]),
        add_to_notion_tool(poster, urls[ADD_TO_NOTION]),
        create_calendar_event_tool(poster, urls[CREATE_CALENDAR_EVENT]),
        zoom_meeting_tool(poster, urls[GET_ZOOM_MEETING]),
        generate_presentation_tool(poster, urls[GENERATE_PRESENTATION]),
        text_to_speech_tool(poster, urls[TEXT_TO_SPEECH]),
        generate_audio_tool(poster, urls[GENERATE_AUDIO]),
    ])
