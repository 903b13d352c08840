# =============================================================================
# core/database.py  -  Database query tool (stand-in)
# =============================================================================
#
# There is no database behind this tool yet: it acknowledges the query and
# answers with a fixed message.  It is the one tool that makes no external
# call, and the one whose output schema is a bare string rather than an
# object.
# =============================================================================

from __future__ import annotations

import logging

from core.envelope import ResultEnvelope, card_envelope
from core.models import CallerIdentity, InvocationContext, ToolDefinition
from core.schema import obj, required, string

logger = logging.getLogger(__name__)

QUERY_DATABASE = "query-database"

ACKNOWLEDGEMENT = "Querying the database..."


async def _query_database(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
    logger.info("Agent %s requested database query: %s", caller.id, args["query"])
    return card_envelope(
        text=ACKNOWLEDGEMENT,
        data=ACKNOWLEDGEMENT,
        title="Database Query",
        content=ACKNOWLEDGEMENT,
    )


def query_database_tool() -> ToolDefinition:
    return ToolDefinition(
        identifier=QUERY_DATABASE,
        name="Query Database",
        description="Performs a database query operation",
        input_schema=obj(
            "Input parameters for the database query",
            required("query", string("The database query to execute")),
        ),
        output_schema=string("Query result message"),
        handler=_query_database,
    )
