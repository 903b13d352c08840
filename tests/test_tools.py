import asyncio

import pytest

from core.audio import GENERATE_AUDIO, TEXT_TO_SPEECH
from core.catalog import DEFAULT_ENDPOINTS, SERVICE_METADATA, build_registry, resolve_endpoints
from core.config import Settings
from core.database import ACKNOWLEDGEMENT, QUERY_DATABASE
from core.errors import ExternalCallFailed, InvalidInput, TransportError
from core.meetings import GET_MEETING_ACTION_ITEMS, GET_ZOOM_MEETING
from core.planner import ADD_TO_NOTION, CREATE_CALENDAR_EVENT

from conftest import FailingPoster, StubPoster

EXPECTED_ORDER = [
    "query-database",
    "get-meeting-action-items",
    "add-to-notion",
    "create-calendar-event",
    "get-zoom-meeting",
    "generate-presentation",
    "text-to-speech",
    "generate-audio",
]

VALID_INPUT = {
    "query-database": {"query": "select 1"},
    "get-meeting-action-items": {},
    "add-to-notion": {"task": "Review PR", "status": "todo", "date": "2024-06-01"},
    "create-calendar-event": {"task": "Team sync"},
    "get-zoom-meeting": {},
    "generate-presentation": {"presentationInstructions": "Five slides on Q3"},
    "text-to-speech": {"text": "hello"},
    "generate-audio": {"text": "hello"},
}


def invoke(registry, identifier, raw_input, caller):
    return asyncio.run(registry.invoke(identifier, raw_input, caller))


def test_catalog_lists_every_tool_once_in_order():
    registry = build_registry(poster=StubPoster())
    identifiers = [tool.identifier for tool in registry.list()]
    assert identifiers == EXPECTED_ORDER
    assert len(set(identifiers)) == len(identifiers)


def test_catalog_entries_describe_schemas_and_pricing():
    entry = build_registry(poster=StubPoster()).catalog()[2]
    assert entry["identifier"] == ADD_TO_NOTION
    assert entry["inputSchema"]["required"] == ["task", "status", "date"]
    assert entry["outputSchema"]["properties"]["pageId"]["type"] == "string"
    assert entry["pricing"] == {"pricePerUse": 0, "currency": "USD"}


@pytest.mark.parametrize("identifier", EXPECTED_ORDER)
def test_every_tool_answers_with_text(identifier, caller):
    registry = build_registry(poster=StubPoster())
    envelope = invoke(registry, identifier, VALID_INPUT[identifier], caller)
    assert envelope.text.strip()
    assert envelope.ui["type"] == "card"


def test_add_to_notion_maps_response_fields(caller):
    poster = StubPoster({"id": "abc", "url": "http://x/abc"})
    registry = build_registry(poster=poster)

    envelope = invoke(registry, ADD_TO_NOTION, VALID_INPUT[ADD_TO_NOTION], caller)

    assert envelope.data == {"pageId": "abc", "url": "http://x/abc"}
    assert "Review PR" in envelope.text
    assert "[View in Notion](http://x/abc)" in envelope.ui["content"]
    assert poster.calls == [
        (DEFAULT_ENDPOINTS[ADD_TO_NOTION], {"task": "Review PR", "status": "todo", "date": "2024-06-01"}),
    ]


def test_missing_fields_stop_the_call(caller):
    poster = StubPoster()
    registry = build_registry(poster=poster)

    with pytest.raises(InvalidInput) as exc_info:
        invoke(registry, ADD_TO_NOTION, {"task": "x"}, caller)

    assert exc_info.value.fields == ["status", "date"]
    assert poster.calls == []


def test_unreachable_collaborator_fails_the_invocation(caller):
    poster = FailingPoster()
    registry = build_registry(poster=poster)

    with pytest.raises(ExternalCallFailed) as exc_info:
        invoke(registry, CREATE_CALENDAR_EVENT, {"task": "Team sync"}, caller)

    assert isinstance(exc_info.value, TransportError)
    assert poster.calls == 1


def test_action_items_need_no_input(caller):
    poster = StubPoster({"instructions": "1. Ship it"})
    registry = build_registry(poster=poster)

    bare = invoke(registry, GET_MEETING_ACTION_ITEMS, {}, caller)
    extra = invoke(registry, GET_MEETING_ACTION_ITEMS, {"unused": 1, "meetingTitle": "Standup"}, caller)

    assert bare.data == {"actionItems": "1. Ship it"}
    assert bare.ui["content"] == "## Instructions\n1. Ship it"
    assert "your most recent meeting" in bare.text
    assert "Standup" in extra.text
    assert [body for _, body in poster.calls] == [{}, {}]


def test_partial_response_degrades_to_empty_strings(caller):
    registry = build_registry(poster=StubPoster({"id": "abc"}))
    envelope = invoke(registry, ADD_TO_NOTION, VALID_INPUT[ADD_TO_NOTION], caller)
    assert envelope.data == {"pageId": "abc", "url": ""}


def test_non_object_response_degrades(caller):
    registry = build_registry(poster=StubPoster(["unexpected"]))
    envelope = invoke(registry, TEXT_TO_SPEECH, {"text": "hi"}, caller)
    assert envelope.data == {"audioUrl": ""}


def test_zoom_meeting_forwards_hint_only_when_given(caller):
    poster = StubPoster({"transcript": "Alice: hi"})
    registry = build_registry(poster=poster)

    first = invoke(registry, GET_ZOOM_MEETING, {}, caller)
    invoke(registry, GET_ZOOM_MEETING, {"input": "Monday standup"}, caller)

    assert first.data == {"transcript": "Alice: hi"}
    assert [body for _, body in poster.calls] == [{}, {"input": "Monday standup"}]


def test_audio_tools_share_a_collaborator(caller):
    poster = StubPoster({"audioUrl": "http://x/a.mp3"})
    registry = build_registry(poster=poster)

    speech = invoke(registry, TEXT_TO_SPEECH, {"text": "hi"}, caller)
    audio = invoke(registry, GENERATE_AUDIO, {"text": "hi"}, caller)

    assert speech.data == audio.data == {"audioUrl": "http://x/a.mp3"}
    assert speech.text != audio.text
    assert poster.calls[0] == poster.calls[1]


def test_query_database_makes_no_external_call(caller):
    poster = StubPoster()
    registry = build_registry(poster=poster)

    envelope = invoke(registry, QUERY_DATABASE, {"query": "select 1"}, caller)

    assert envelope.data == ACKNOWLEDGEMENT
    assert poster.calls == []


def test_endpoint_overrides(caller):
    settings = Settings(endpoint_overrides={CREATE_CALENDAR_EVENT: "https://calendar.test/run"})
    poster = StubPoster({"calendarURL": "https://cal/1"})
    registry = build_registry(poster=poster, settings=settings)

    invoke(registry, CREATE_CALENDAR_EVENT, {"task": "Team sync"}, caller)

    assert poster.calls[0][0] == "https://calendar.test/run"
    assert resolve_endpoints(settings)[ADD_TO_NOTION] == DEFAULT_ENDPOINTS[ADD_TO_NOTION]


def test_explicit_endpoints_win(caller):
    poster = StubPoster()
    registry = build_registry(poster=poster, endpoints={ADD_TO_NOTION: "https://notion.test"})
    invoke(registry, ADD_TO_NOTION, VALID_INPUT[ADD_TO_NOTION], caller)
    assert poster.calls[0][0] == "https://notion.test"


def test_service_metadata():
    info = SERVICE_METADATA.to_dict()
    assert info["title"] == "Flow Pilot"
    assert info["version"] == "1.0.0"
    assert info["exampleQueries"][0]["category"] == "Tasks"
