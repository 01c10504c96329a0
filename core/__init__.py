# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the travel orchestrator:
# provider capabilities (weather, currency, translation), the mock travel
# inventory, cost and scoring rules, and the orchestrator that fans out
# across them.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, FastAPI, or any
#   orchestration framework.  Without API keys every provider runs on mock
#   data, so the whole package works with zero internet access.
#
# The protocol layers (tools/, web/) and the agent (agent/) are just wiring
# around it.
# =============================================================================
