# =============================================================================
# core/config.py  -  Process configuration
# =============================================================================
#
# Everything configurable comes from environment variables.  A .env file in
# the working directory (or a parent) is loaded first, so local development
# only needs:
#
#     FLOW_PILOT_API_KEY=...        # required by the identity layer
#     OPENROUTER_API_KEY=...        # only for the demo agent (LiteLlm)
#
# Collaborator URLs have built-in defaults (see core/catalog.py) and can be
# overridden one tool at a time:
#
#     FLOW_PILOT_ENDPOINT_ADD_TO_NOTION=https://example.test/notion
# =============================================================================

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from dotenv import load_dotenv

from core.errors import ConfigError

API_KEY_ENV = "FLOW_PILOT_API_KEY"
TRANSPORT_ENV = "FLOW_PILOT_TRANSPORT"
HOST_ENV = "FLOW_PILOT_HOST"
PORT_ENV = "FLOW_PILOT_PORT"
HTTP_TIMEOUT_ENV = "FLOW_PILOT_HTTP_TIMEOUT"
LOG_LEVEL_ENV = "FLOW_PILOT_LOG_LEVEL"
MODEL_ENV = "FLOW_PILOT_MODEL"
ENDPOINT_ENV_PREFIX = "FLOW_PILOT_ENDPOINT_"

DEFAULT_PORT = 2022
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def endpoint_env_name(tool_id: str) -> str:
    """``add-to-notion`` -> ``FLOW_PILOT_ENDPOINT_ADD_TO_NOTION``."""
    return ENDPOINT_ENV_PREFIX + tool_id.upper().replace("-", "_")


def require_env(var_name: str) -> str:
    """Return the value of an environment variable or raise a clear error.

    Raises:
        ConfigError: If the variable is missing or empty.
    """
    value = os.environ.get(var_name, "")
    if not value:
        raise ConfigError(f"Required environment variable '{var_name}' is not set.")
    return value


def _number_env(var_name: str, default: float, cast: type) -> float:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Environment variable '{var_name}' must be a number, got {raw!r}.") from exc


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"
    model: str = DEFAULT_MODEL
    endpoint_overrides: Mapping[str, str] = field(default_factory=dict)

    def endpoint_for(self, tool_id: str, default: str) -> str:
        return self.endpoint_overrides.get(tool_id, default)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigError(f"Required environment variable '{API_KEY_ENV}' is not set.")
        return self.api_key


def load_settings(tool_ids: tuple[str, ...] = ()) -> Settings:
    """Build Settings from the environment (after loading .env).

    Args:
        tool_ids: Identifiers whose endpoint overrides should be picked up.

    Raises:
        ConfigError: If a numeric variable cannot be parsed, or an endpoint
            override is not an http(s) URL.
    """
    load_dotenv()

    overrides = {}
    for tool_id in tool_ids:
        var_name = endpoint_env_name(tool_id)
        url = os.environ.get(var_name, "").strip()
        if not url:
            continue
        if urlsplit(url).scheme not in ("http", "https"):
            raise ConfigError(f"Environment variable '{var_name}' must be an http(s) URL, got {url!r}.")
        overrides[tool_id] = url

    return Settings(
        api_key=os.environ.get(API_KEY_ENV, ""),
        transport=os.environ.get(TRANSPORT_ENV, "stdio").strip() or "stdio",
        host=os.environ.get(HOST_ENV, "127.0.0.1").strip() or "127.0.0.1",
        port=int(_number_env(PORT_ENV, DEFAULT_PORT, int)),
        http_timeout=float(_number_env(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT, float)),
        log_level=os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO",
        model=os.environ.get(MODEL_ENV, DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        endpoint_overrides=overrides,
    )
