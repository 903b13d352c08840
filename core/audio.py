# =============================================================================
# core/audio.py  -  Text-to-audio tools
# =============================================================================
#
# Two tools share one collaborator and differ only in wording:
#
#   text-to-speech  -> "convert this text to speech"
#   generate-audio  -> "generate audio from this text"
#
# Tool identifiers must be unique, so the speech variant is registered
# under its own id instead of a second "generate-audio".
#
# The description promises customizable voices and styles, but neither the
# input schema nor the collaborator takes a voice parameter.  Only the text
# is forwarded.
# =============================================================================

from __future__ import annotations

import logging

from core.envelope import ResultEnvelope, card_envelope
from core.external import ExpectedField, Poster, decode_partial
from core.models import CallerIdentity, InvocationContext, ToolDefinition
from core.schema import obj, required, string

logger = logging.getLogger(__name__)

TEXT_TO_SPEECH = "text-to-speech"
GENERATE_AUDIO = "generate-audio"

AUDIO_OUTPUT = obj(
    "Generated audio details",
    required("audioUrl", string("URL to the generated audio file")),
)
AUDIO_FIELDS = {"audioUrl": ExpectedField("audioUrl")}


def _audio_tool(
    poster: Poster,
    url: str,
    *,
    identifier: str,
    input_description: str,
    text_description: str,
    summary: str,
    title: str,
    lead: str,
) -> ToolDefinition:
    async def handler(args: dict, caller: CallerIdentity, context: InvocationContext) -> ResultEnvelope:
        text = args["text"]
        logger.info("Agent %s requested %s: %s", caller.id, identifier, text)

        response = await poster.post(url, {"text": text})
        data = decode_partial(response, AUDIO_FIELDS)

        return card_envelope(
            text=summary,
            data=data,
            title=title,
            content=f"{lead} Listen below:\n\n[Download Audio]({data['audioUrl']})",
        )

    return ToolDefinition(
        identifier=identifier,
        name="Generate Audio",
        description="Generates audio from text input with customizable voices and styles",
        input_schema=obj(input_description, required("text", string(text_description))),
        output_schema=AUDIO_OUTPUT,
        handler=handler,
    )


def text_to_speech_tool(poster: Poster, url: str) -> ToolDefinition:
    return _audio_tool(
        poster, url,
        identifier=TEXT_TO_SPEECH,
        input_description="Input parameters for text-to-speech conversion",
        text_description="The text to convert to speech",
        summary="Converted text to speech",
        title="Text to Speech",
        lead="Your text has been converted to speech.",
    )


def generate_audio_tool(poster: Poster, url: str) -> ToolDefinition:
    return _audio_tool(
        poster, url,
        identifier=GENERATE_AUDIO,
        input_description="Input parameters for audio generation",
        text_description="The text to convert to audio",
        summary="Generated audio",
        title="Audio Generated",
        lead="Your audio has been successfully generated.",
    )
