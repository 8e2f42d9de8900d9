# =============================================================================
# birdagent/__init__.py
# =============================================================================
# This package contains the Google ADK console agent that explores the bird
# dataset through the tool server.
#
# ARCHITECTURAL ROLE:
#   The agent is a coordinator.  It:
#     1. Receives a question ("Which owls are endangered?")
#     2. Picks the bird tools that can answer it
#     3. Calls them over MCP (the tool server runs as a stdio subprocess)
#     4. Summarizes the reports for the user
#
#   It contains no bird data logic of its own: that is birdcore/, exposed
#   through birdtools/.
# =============================================================================
