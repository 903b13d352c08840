# =============================================================================
# core/envelope.py  -  Result Envelope (what every handler returns)
# =============================================================================
#
# Every tool answers with the same three parts:
#
#   text -> short human-readable summary (always present, never empty)
#   data -> machine-readable payload, loosely matching the output schema
#   ui   -> an opaque UI description the caller can render
#
# The UI description is a plain value built in one step (CardUI) rather
# than assembled through chained setter calls.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.errors import IncompleteEnvelope


@dataclass(frozen=True)
class CardUI:
    """A card: a title above a block of light markdown."""

    title: str
    content: str
    render_mode: str = "page"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "card",
            "renderMode": self.render_mode,
            "title": self.title,
            "content": self.content,
        }


@dataclass(frozen=True)
class ResultEnvelope:
    text: str
    data: Any = None
    ui: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise IncompleteEnvelope("Result envelope requires non-empty text.")

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "data": self.data, "ui": self.ui}


def card_envelope(
    text: str,
    data: Any,
    title: str,
    content: str,
    render_mode: str = "page",
) -> ResultEnvelope:
    """Build the usual text + data + card envelope in one call."""
    return ResultEnvelope(
        text=text,
        data=data,
        ui=CardUI(title=title, content=content, render_mode=render_mode).to_dict(),
    )
