# =============================================================================
# core/meetings.py  -  Meeting tools (action items, transcript, slides)
# =============================================================================
#
#   get-meeting-action-items -> follow-ups from the most recent meeting
#   get-zoom-meeting         -> transcript of the most recent Zoom meeting
#   generate-presentation    -> slide deck built from instructions
#
# The first two need no input: the collaborator always works on "the most
# recent" meeting.  Each accepts one optional hint that is passed along
# when the agent supplies it.
# =============================================================================

from __future__ import annotations

import logging

from core.envelope import ResultEnvelope, card_envelope
from core.external import ExpectedField, Poster, decode_partial
from core.models import CallerIdentity, InvocationContext, ToolDefinition
from core.schema import obj, optional, required, string

logger = logging.getLogger(__name__)

GET_MEETING_ACTION_ITEMS = "get-meeting-action-items"
GET_ZOOM_MEETING = "get-zoom-meeting"
GENERATE_PRESENTATION = "generate-presentation"

DEFAULT_MEETING = "your most recent meeting"

ACTION_ITEMS_INPUT = obj(
    "No input required",
    optional("meetingTitle", string("Title of the meeting, if known")),
)
ACTION_ITEMS_OUTPUT = obj(
    "Meeting action items and follow-up details",
    required("actionItems", string("Description of meeting action items")),
)
ACTION_ITEMS_FIELDS = {"actionItems": ExpectedField("instructions")}

TRANSCRIPT_INPUT = obj(
    "",
    optional("input", string("Which meeting to fetch, if not the most recent")),
)
TRANSCRIPT_OUTPUT = obj(
    "Zoom meeting transcript",
    required("transcript", string("Zoom meeting transcript")),
)
TRANSCRIPT_FIELDS = {"transcript": ExpectedField("transcript")}

PRESENTATION_INPUT = obj(
    "Input parameters for generating a presentation",
    required("presentationInstructions", string("The presentation instructions")),
)
PRESENTATION_OUTPUT = obj(
    "Generated presentation details",
    required("presentationUrl", string("URL to the generated presentation")),
)
PRESENTATION_FIELDS = {"presentationUrl": ExpectedField("presentationUrl")}


def meeting_action_items_tool(poster: Poster, url: str) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        meeting = args.get("meetingTitle") or DEFAULT_MEETING
        logger.info("Agent %s requested action items for %s", caller.id, meeting)

        response = await poster.post(url, {})
        data = decode_partial(response, ACTION_ITEMS_FIELDS)

        return card_envelope(
            text=f"Retrieved action items for {meeting}",
            data=data,
            title="👨‍💻 Orchestrator Agent:",
            content=f"## Instructions\n{data['actionItems']}",
        )

    return ToolDefinition(
        identifier=GET_MEETING_ACTION_ITEMS,
        name="Get Meeting Action Items",
        description="Get action items from my most recent meeting",
        input_schema=ACTION_ITEMS_INPUT,
        output_schema=ACTION_ITEMS_OUTPUT,
        handler=handler,
    )


def zoom_meeting_tool(poster: Poster, url: str) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        which = args.get("input")
        logger.info("Agent %s requested zoom meeting for: %s", caller.id, which or DEFAULT_MEETING)

        body = {"input": which} if which else {}
        response = await poster.post(url, body)
        data = decode_partial(response, TRANSCRIPT_FIELDS)

        return card_envelope(
            text=f'Generated transcript for "{which or DEFAULT_MEETING}"',
            data=data,
            title="Generated Transcript",
            content=str(data["transcript"]),
        )

    return ToolDefinition(
        identifier=GET_ZOOM_MEETING,
        name="Get Zoom Meeting",
        description="Gets most recent zoom meeting",
        input_schema=TRANSCRIPT_INPUT,
        output_schema=TRANSCRIPT_OUTPUT,
        handler=handler,
    )


def generate_presentation_tool(poster: Poster, url: str) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        instructions = args["presentationInstructions"]
        logger.info("Agent %s requested to generate presentation from transcript", caller.id)

        response = await poster.post(url, {"presentationInstructions": instructions})
        data = decode_partial(response, PRESENTATION_FIELDS)
        link = data["presentationUrl"]

        return card_envelope(
            text="Generated presentation",
            data=data,
            title="Presentation Generated",
            content=(
                "## Generated Presentation\n\n"
                "Your presentation has been successfully generated from the meeting "
                f"transcript. You can view it below or [open in full screen]({link}).\n\n"
                f"![Presentation]({link})\n\n"
                "*Tip: Click the presentation and use arrow keys to navigate slides*"
            ),
        )

    return ToolDefinition(
        identifier=GENERATE_PRESENTATION,
        name="Generate Presentation",
        description="Generates a presentation from a Zoom meeting transcript",
        input_schema=PRESENTATION_INPUT,
        output_schema=PRESENTATION_OUTPUT,
        handler=handler,
    )
