# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the protocol layer between MCP clients (the ADK agent, the web
#   supervisor) and the core travel logic.  mcp_server.py:
#     1. Declares one MCP tool per travel operation
#     2. Delegates validation and dispatch to core.operations
#     3. Converts core errors into MCP tool errors
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain business logic (that's in core/)
#   - They do NOT know about Google ADK or FastAPI
#
# TOOL CONTRACT QUALITY:
#   Each tool has a descriptive name, a docstring the LLM reads to decide
#   WHEN to call it, typed parameters, and a documented return shape.
# =============================================================================
