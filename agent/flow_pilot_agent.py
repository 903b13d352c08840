# =============================================================================
# agent/flow_pilot_agent.py  -  Google ADK agent wired to the tool server
# =============================================================================
#
# HOW IT FITS TOGETHER:
#
#   Google ADK Agent ──(LiteLlm)──▶ LLM (reasoning)
#          │
#          └──(MCP over stdio)──▶ tools/mcp_server.py ──▶ ToolRegistry
#
#   ADK starts the tool server as a subprocess, lists its tools, and lets
#   the LLM call them.  The agent itself has no tool logic.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_flow_pilot_prompt
from core.config import Settings, load_settings


def create_agent(settings: Settings | None = None) -> Agent:
    """Create the Flow Pilot agent.

    Args:
        settings: Process settings; loaded from the environment if omitted.
            Only ``model`` is used here.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or load_settings()

    # The server runs as a module from the project root so `core` resolves,
    # with the same interpreter (and therefore the same virtualenv) as us.
    # The MCP stdio client only forwards a minimal environment by default;
    # the server needs FLOW_PILOT_* from ours.
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=dict(os.environ),
        ),
    )

    # LiteLlm routes "openrouter/<vendor>/<model>" strings through OpenRouter
    # and reads OPENROUTER_API_KEY from the environment.
    return Agent(
        name="flow_pilot",
        model=LiteLlm(model=settings.model),
        instruction=get_flow_pilot_prompt(),
        tools=[mcp_tools],
    )
