# =============================================================================
# main.py  -  Entry Point for the Bird Data Explorer Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (birdagent/explorer_agent.py), which
#      spawns the bird data tool server (birdtools/mcp_server.py) over stdio
#   2. Sets up an in-memory session
#   3. Reads questions from the console and sends them to the agent
#   4. Prints each tool call as it happens, then the final answer
#
# To run ONLY the tool server (for Claude Desktop or any other MCP host):
#   uv run python -m birdtools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Load BIRD_* settings and the LLM API key from .env before the agent is built
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from birdagent.explorer_agent import AGENT_NAME, create_agent

APP_NAME = "bird_explorer"
USER_ID = "console_user"


async def run_agent():
    """Run the bird explorer agent interactively until the user quits."""

    print("=" * 70)
    print("  BIRD DATA EXPLORER")
    print("  Powered by Google ADK + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print(f"✅ {AGENT_NAME} ready!\n")
    print("💬 Ask about the world's birds (e.g. 'Which owls are endangered?')")
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

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

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
