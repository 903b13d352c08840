# =============================================================================
# core/registry.py  -  Tool Registry (lookup, validation, dispatch)
# =============================================================================
#
# HOW AN INVOCATION FLOWS:
#
#   invoke("add-to-notion", {...}, caller)
#     1. look up the ToolDefinition       -> UnknownTool if absent
#     2. validate input vs input schema   -> InvalidInput if it fails
#     3. await the handler                -> may raise ExternalCallFailed
#     4. check data vs output schema      -> advisory: logged, never fatal
#     5. return the handler's envelope unchanged
#
#   Steps 1 and 2 happen BEFORE the handler runs, so a handler is never
#   called with input the registry already declared invalid.
#
# OWNERSHIP:
#   The registry is built once (core/catalog.py -> build_registry) and handed
#   to the transport layer explicitly.  There is no module-level instance.
#   It keeps no per-call state, so concurrent invocations don't interact.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from core.envelope import ResultEnvelope
from core.errors import DuplicateIdentifier, InvalidInput, UnknownTool
from core.models import CallerIdentity, InvocationContext, ToolDefinition

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Ordered catalog of tools plus the invocation contract."""

    def __init__(self, definitions: Iterable[ToolDefinition] = ()):
        self._tools: dict[str, ToolDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: ToolDefinition) -> None:
        """Add a tool.

        Raises:
            DuplicateIdentifier: The identifier is taken.  The existing
                registration is left in place.
        """
        if definition.identifier in self._tools:
            raise DuplicateIdentifier(definition.identifier)
        self._tools[definition.identifier] = definition

    def get(self, identifier: str) -> ToolDefinition:
        try:
            return self._tools[identifier]
        except KeyError:
            raise UnknownTool(identifier) from None

    def list(self) -> tuple[ToolDefinition, ...]:
        """Every tool, in registration order."""
        return tuple(self._tools.values())

    def catalog(self) -> list[dict[str, Any]]:
        """JSON-ready catalog entries, in registration order."""
        return [definition.describe() for definition in self._tools.values()]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self.list())

    async def invoke(
        self,
        identifier: str,
        raw_input: Mapping[str, Any] | None,
        caller: CallerIdentity,
        context: InvocationContext | None = None,
    ) -> ResultEnvelope:
        """Validate ``raw_input`` and run the matching handler.

        Args:
            identifier: Tool identifier from the catalog.
            raw_input: Arguments as received from the caller.  None means {}.
            caller: Identity of the invoking agent.
            context: Per-call ambient data; a fresh one is made if omitted.

        Returns:
            The handler's ResultEnvelope, unchanged.

        Raises:
            UnknownTool: No tool has this identifier.
            InvalidInput: ``raw_input`` failed the input schema.
            ExternalCallFailed: Propagated from the handler.
        """
        definition = self.get(identifier)
        context = context or InvocationContext.new()
        raw_input = {} if raw_input is None else raw_input

        logger.info(
            "invoke %s caller=%s trace=%s",
            identifier, caller.id, context.trace_id,
        )

        result = definition.input_schema.validate(raw_input)
        if not result:
            logger.warning("invoke %s rejected: %s", identifier, result.describe())
            raise InvalidInput(identifier, result.failures)

        envelope = await definition.handler(
            definition.input_schema.prune(raw_input), caller, context,
        )
        if not isinstance(envelope, ResultEnvelope):
            raise TypeError(
                f"Handler for '{identifier}' returned {type(envelope).__name__}, expected ResultEnvelope"
            )

        self._check_output(definition, envelope)
        logger.info("invoke %s done trace=%s", identifier, context.trace_id)
        return envelope

    @staticmethod
    def _check_output(definition: ToolDefinition, envelope: ResultEnvelope) -> None:
        # Advisory only: several tools legitimately return a looser shape
        # than they declare, and the caller still gets the envelope.
        if envelope.data is None:
            if not definition.output_schema.is_empty:
                logger.warning("%s returned no data but declares an output schema", definition.identifier)
            return
        result = definition.output_schema.validate(envelope.data)
        if not result:
            logger.warning(
                "%s output diverges from its schema: %s",
                definition.identifier, result.describe(),
            )
