# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the tool service)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through an
# invocation:
#
#   ToolDefinition     -> what a tool IS (id, metadata, schemas, handler)
#   CallerIdentity     -> WHO is calling (the agent)
#   InvocationContext  -> per-call ambient data (trace id, start time)
#   Pricing            -> what a call costs
#   ServiceMetadata    -> how the service introduces itself to agents
#
# ToolDefinitions are built once at startup and never change.  Callers,
# contexts and envelopes are created per call and thrown away afterwards,
# so nothing here is shared between two invocations.
# =============================================================================

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from core.schema import EMPTY, SchemaDescriptor

if TYPE_CHECKING:
    from core.envelope import ResultEnvelope


# -----------------------------------------------------------------------------
# Who is calling, and in what context
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CallerIdentity:
    """The agent invoking a tool.

    ``id`` is opaque to the core; ``profile`` holds whatever the transport
    layer knows about the caller (client name, session, ...).
    """

    id: str
    profile: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InvocationContext:
    """Ambient data for exactly one invocation."""

    trace_id: str
    started_at: datetime
    extras: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def new(cls, trace_id: str | None = None, **extras: Any) -> InvocationContext:
        return cls(
            trace_id=trace_id or uuid.uuid4().hex,
            started_at=datetime.now(timezone.utc),
            extras=extras,
        )


# Every handler has this shape.  It may await one external call and must
# return a ResultEnvelope.
Handler = Callable[[dict, CallerIdentity, InvocationContext], Awaitable["ResultEnvelope"]]


# -----------------------------------------------------------------------------
# Tool definitions
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Pricing:
    """Per-use price.  Zero is a valid price."""

    amount: float = 0
    currency: str = "USD"

    def to_dict(self) -> dict[str, Any]:
        return {"pricePerUse": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class ToolDefinition:
    """Everything the registry needs to advertise and dispatch one tool."""

    identifier: str                    # stable, unique, used for lookup
    name: str                          # display name
    description: str                   # the agent reads this to decide WHEN to call
    handler: Handler
    input_schema: SchemaDescriptor = EMPTY
    output_schema: SchemaDescriptor = EMPTY
    pricing: Pricing = field(default_factory=Pricing)

    def describe(self) -> dict[str, Any]:
        """Catalog entry for discovery (no handler, JSON-serialisable)."""
        return {
            "identifier": self.identifier,
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.to_json_schema(),
            "outputSchema": self.output_schema.to_json_schema(),
            "pricing": self.pricing.to_dict(),
        }


# -----------------------------------------------------------------------------
# Service metadata
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExampleQueryGroup:
    category: str
    queries: tuple[str, ...] = ()


@dataclass(frozen=True)
class ServiceMetadata:
    """How the service introduces itself to agents."""

    title: str
    description: str
    version: str
    author: str = ""
    tags: tuple[str, ...] = ()
    logo: str = ""
    example_queries: tuple[ExampleQueryGroup, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "version": self.version,
            "author": self.author,
            "tags": list(self.tags),
            "logo": self.logo,
            "exampleQueries": [
                {"category": group.category, "queries": list(group.queries)}
                for group in self.example_queries
            ],
        }
