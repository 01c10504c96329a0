# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent is a conversational client of the travel tool server.  It:
#     1. Receives the traveler's request ("Compare Paris and Tokyo in June")
#     2. Asks for anything missing (dates, destination)
#     3. Calls tools (via MCP) to gather the data
#     4. Explains the results in plain language
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the business logic (that's in core/)
#   - It is NOT the tool implementations (that's in tools/)
#
# THE LLM'S ROLE:
#   The LLM (any LiteLlm model, AGENT_MODEL) reads the system prompt and
#   the tool descriptions and decides which tools to call and when.
# =============================================================================
