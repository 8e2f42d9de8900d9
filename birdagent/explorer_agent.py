# =============================================================================
# birdagent/explorer_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Configures the Google ADK agent that answers bird questions by calling
#   the bird data tool server.
#
#   ┌──────────────────────────────────────────────────────────────────┐
#   │                       Google ADK Agent                          │
#   │   System prompt ──▶ LLM (via LiteLlm) ──▶ MCP tool connection    │
#   └──────────────────────────────────────────────────────────────────┘
#                                                      │ stdio
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  FastMCP Server     │
#                                          │  (birdtools)        │
#                                          └─────────────────────┘
#                                                      │ HTTP
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  Bird data REST API │
#                                          └─────────────────────┘
#
# MCP CONNECTION:
#   ADK starts `python -m birdtools.mcp_server` as a subprocess and talks to
#   it over stdin/stdout.  The MCP stdio client only forwards a minimal
#   environment to the subprocess, so the BIRD_* settings are passed along
#   explicitly.
#
# MODEL:
#   Any LiteLlm model string works; BIRD_AGENT_MODEL selects it (default
#   "openrouter/openai/gpt-4o", which reads OPENROUTER_API_KEY).
# =============================================================================

import os
import sys
from typing import Mapping, Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import McpToolset, StdioConnectionParams
from mcp import StdioServerParameters

from birdagent.prompt import BIRD_EXPLORER_PROMPT
from birdcore.config import Settings, load_settings

AGENT_NAME = "bird_data_explorer"

# Seconds to wait for the tool server subprocess to answer
SERVER_STARTUP_TIMEOUT = 30.0


def server_environment(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Environment for the tool server subprocess: PATH plus every BIRD_* variable."""
    env = os.environ if environ is None else environ
    forwarded = {key: value for key, value in env.items() if key.startswith("BIRD_")}
    if "PATH" in env:
        forwarded["PATH"] = env["PATH"]
    return forwarded


def create_agent(settings: Optional[Settings] = None) -> Agent:
    """Create the bird explorer agent wired to the tool server.

    Args:
        settings: Runtime settings; read from the environment when omitted.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or load_settings()

    # -------------------------------------------------------------------------
    # Step 1: the MCP tool connection
    # -------------------------------------------------------------------------
    # sys.executable is the interpreter running this agent, so the server
    # subprocess sees the same virtual environment (fastmcp, birdcore, ...).
    bird_tools = McpToolset(
        connection_params=StdioConnectionParams(
            server_params=StdioServerParameters(
                command=sys.executable,
                args=["-m", "birdtools.mcp_server"],
                env=server_environment(),
            ),
            timeout=SERVER_STARTUP_TIMEOUT,
        ),
    )

    # -------------------------------------------------------------------------
    # Step 2: the agent itself
    # -------------------------------------------------------------------------
    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=settings.agent_model),
        instruction=BIRD_EXPLORER_PROMPT,
        tools=[bird_tools],
    )
