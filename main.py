# =============================================================================
# main.py  -  Interactive entry point for the Flow Pilot assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (FLOW_PILOT_API_KEY, OPENROUTER_API_KEY, ...)
#   2. Creates the Google ADK agent (agent/flow_pilot_agent.py), which
#      launches the tool server (tools/mcp_server.py) over stdio
#   3. Reads a request, lets the agent pick and call tools, prints the answer
#
# To run only the tool server (e.g. for another MCP client):
#   python -m tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads OPENROUTER_API_KEY when the agent is created, so the .env
# file has to be loaded before the ADK imports below.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.flow_pilot_agent import create_agent

APP_NAME = "flow_pilot"
USER_ID = "demo_user"


async def run_agent():
    """Run the Flow Pilot agent interactively until the user quits."""
    print("=" * 70)
    print("  FLOW PILOT")
    print("  Tasks, meetings and calendar via Google ADK + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # InMemorySessionService keeps the conversation in RAM: fine for a
    # terminal demo, one session per run.
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Try: \"Add a task to Notion: Review project proposal by Friday\"")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
