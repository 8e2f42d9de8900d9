# =============================================================================
# birdtools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   birdtools/ is the translation layer between MCP hosts and birdcore/.
#   Each tool:
#     1. Declares typed parameters (so the LLM knows WHAT to pass)
#     2. Takes its description from the catalog (so it knows WHEN to call)
#     3. Hands the call to birdcore.dispatch()
#     4. Turns a BirdDataError into a labeled MCP tool error
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or parse JSON (that's in birdcore/)
#   - They do NOT know about Google ADK (the agent lives in birdagent/)
# =============================================================================
