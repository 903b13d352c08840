# =============================================================================
# core/planner.py  -  Task tracker & calendar tools
# =============================================================================
#
#   add-to-notion          -> write a task row into a Notion database
#   create-calendar-event  -> create a calendar event, return an "add" link
#
# Both tools are thin: forward the validated input to their collaborator,
# read back the one or two fields they care about (with defaults), and
# wrap them in a card.
# =============================================================================

from __future__ import annotations

import logging

from core.envelope import ResultEnvelope, card_envelope
from core.external import ExpectedField, Poster, decode_partial
from core.models import CallerIdentity, InvocationContext, ToolDefinition
from core.schema import obj, required, string

logger = logging.getLogger(__name__)

ADD_TO_NOTION = "add-to-notion"
CREATE_CALENDAR_EVENT = "create-calendar-event"

NOTION_INPUT = obj(
    "Input parameters for creating a Notion task",
    required("task", string("Task description")),
    required("status", string("Task status (e.g., doing, todo, done)")),
    required("date", string("Due date for the task")),
)
NOTION_OUTPUT = obj(
    "Created Notion page details",
    required("pageId", string("ID of the created Notion page")),
    required("url", string("URL of the created Notion page")),
)
NOTION_FIELDS = {
    "pageId": ExpectedField("id"),
    "url": ExpectedField("url"),
}

CALENDAR_INPUT = obj(
    "Input parameters for creating a calendar event",
    required("task", string("Event description or title")),
)
CALENDAR_OUTPUT = obj(
    "Calendar event details",
    required("calendarURL", string("URL to the created calendar event")),
)
CALENDAR_FIELDS = {"calendarURL": ExpectedField("calendarURL")}


def add_to_notion_tool(poster: Poster, url: str) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        task, status, date = args["task"], args["status"], args["date"]
        logger.info("Agent %s requested to add task to Notion: %s", caller.id, task)

        response = await poster.post(url, {"task": task, "status": status, "date": date})
        data = decode_partial(response, NOTION_FIELDS)

        return card_envelope(
            text=f'Added task "{task}" to Notion',
            data=data,
            title="Task Added to Notion",
            content=(
                "Successfully added task to Notion:\n\n"
                f"- Task: {task}\n"
                f"- Status: {status}\n"
                f"- Due Date: {date}\n\n"
                f"[View in Notion]({data['url']})"
            ),
        )

    return ToolDefinition(
        identifier=ADD_TO_NOTION,
        name="Add to Notion",
        description="Adds a new task to Notion database",
        input_schema=NOTION_INPUT,
        output_schema=NOTION_OUTPUT,
        handler=handler,
    )


def create_calendar_event_tool(poster: Poster, url: str) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        task = args["task"]
        logger.info("Agent %s requested to create calendar event: %s", caller.id, task)

        response = await poster.post(url, {"task": task})
        data = decode_partial(response, CALENDAR_FIELDS)

        return card_envelope(
            text=f'Created calendar event for "{task}"',
            data=data,
            title="Calendar Event Created",
            content=(
                "Successfully created calendar event:\n\n"
                f"- Event: {task}\n\n"
                f"[Add to Calendar]({data['calendarURL']})"
            ),
        )

    return ToolDefinition(
        identifier=CREATE_CALENDAR_EVENT,
        name="Create Calendar Event",
        description="Creates a new calendar event",
        input_schema=CALENDAR_INPUT,
        output_schema=CALENDAR_OUTPUT,
        handler=handler,
    )
