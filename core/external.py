# =============================================================================
# core/external.py  -  External Call Adapter + partial response decoding
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every tool talks to exactly one third-party endpoint, always the same
#   way: POST a JSON body, read a JSON body back.  This module owns that
#   boundary so handlers never touch sockets.
#
# FAILURE MODES (kept distinct on purpose, see core/errors.py):
#   - TransportError -> could not reach the endpoint (bad URL, DNS, refused,
#                       timeout, connection dropped mid-response)
#   - DecodeError    -> reached it, but the body is not JSON
#   No retries.  One attempt, then the error goes to the caller.
#
# PARTIAL DECODING:
#   Collaborators are loosely specified.  A handler names every field it
#   expects together with a default (ExpectedField); decode_partial() fills
#   in the default when the field is missing instead of failing.
# =============================================================================

from __future__ import annotations

import asyncio
import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from core.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)

# Parsed JSON body of a collaborator response.  Untyped on purpose.
ExternalResponse = Any


class Poster(Protocol):
    async def post(self, url: str, body: Mapping[str, Any]) -> ExternalResponse:
        ...


class ExternalCallAdapter:
    """POST JSON, return parsed JSON.  The default Poster for every tool."""

    def __init__(self, timeout: float | None = None, headers: Mapping[str, str] | None = None):
        """
        Args:
            timeout: Seconds before the call is abandoned.  None leaves it to
                the socket default.
            headers: Extra request headers (e.g. auth for a collaborator).
        """
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", "Accept": "application/json"}
        self.headers.update(headers or {})

    async def post(self, url: str, body: Mapping[str, Any]) -> ExternalResponse:
        """Send ``body`` to ``url`` and return the decoded JSON response.

        The blocking HTTP call runs in a worker thread, so the event loop
        is only suspended here and other invocations keep running.

        Raises:
            TransportError: Connection, DNS or timeout failure.
            DecodeError: The response body is not valid JSON.
        """
        raw = await asyncio.to_thread(self._send, url, body)
        return self._decode(url, raw)

    def _send(self, url: str, body: Mapping[str, Any]) -> bytes:
        payload = json.dumps(dict(body)).encode("utf-8")
        try:
            req = urllib.request.Request(url, data=payload, headers=self.headers, method="POST")
        except ValueError as exc:
            raise TransportError(url, str(exc)) from exc
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            with urllib.request.urlopen(req, **kwargs) as response:
                return response.read()
        except urllib.error.HTTPError as exc:
            # A non-2xx answer still has a body worth decoding; whether it
            # holds the expected fields is the handler's business.
            logger.warning("POST %s answered HTTP %s", url, exc.code)
            try:
                return exc.read()
            except (http.client.HTTPException, OSError) as read_exc:
                raise TransportError(url, f"HTTP {exc.code}, body unreadable ({read_exc!r})") from read_exc
            finally:
                exc.close()
        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise TransportError(url, str(reason)) from exc
        except http.client.HTTPException as exc:
            # Connection dropped mid-response (IncompleteRead, BadStatusLine...).
            raise TransportError(url, repr(exc)) from exc

    @staticmethod
    def _decode(url: str, raw: bytes) -> ExternalResponse:
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(url, f"response is not valid JSON ({exc})") from exc


# -----------------------------------------------------------------------------
# Partial decoding
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExpectedField:
    """A field a handler reads from a response, and what to use if it's absent."""

    key: str
    default: Any = ""


def decode_partial(response: ExternalResponse, fields: Mapping[str, ExpectedField]) -> dict[str, Any]:
    """Pull the named fields out of a response, degrading to defaults.

    Args:
        response: Parsed JSON body (any shape).
        fields: Output name -> ExpectedField describing where to read it.

    Returns:
        A dict with exactly the keys of ``fields``.  Never raises.
    """
    source = response if isinstance(response, Mapping) else {}
    if not isinstance(response, Mapping):
        logger.debug("Response is a %s, not an object; using defaults", type(response).__name__)

    decoded: dict[str, Any] = {}
    for name, expected in fields.items():
        value = source.get(expected.key)
        if value is None:
            logger.debug("Response field %r missing; defaulting %s to %r", expected.key, name, expected.default)
            value = expected.default
        decoded[name] = value
    return decoded
