# =============================================================================
# agent/travel_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that talks to the traveler, decides which
#   travel tools to call, and explains the results.
#
# ARCHITECTURE:
#
#     ADK Agent ──▶ LiteLlm (AGENT_MODEL) ──▶ reasoning
#         │
#         └──▶ MCPToolset ──stdio──▶ tools/mcp_server.py ──▶ core/
#
#   The agent has NO business logic.  It has a system prompt
#   (agent/prompt.py), a model, and the tool server's 14 tools.
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess ("python -m tools.mcp_server"
#   with this interpreter, from the project root) and speaks MCP over its
#   stdin/stdout.  The subprocess inherits our environment, so the same
#   API keys decide live vs mock providers there.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_travel_assistant_prompt
from core.config import get_settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def tool_server_parameters() -> StdioServerParameters:
    """How to launch the travel tool server over stdio."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(model: Optional[str] = None) -> Agent:
    """Create the travel planning assistant.

    Args:
        model: LiteLlm model string (e.g. "openrouter/openai/gpt-4o-mini").
            Defaults to AGENT_MODEL from the environment.

    Returns:
        A configured Google ADK Agent instance.
    """
    mcp_tools = MCPToolset(connection_params=tool_server_parameters())

    return Agent(
        name="travel_assistant",
        model=LiteLlm(model=model or get_settings().agent_model),
        instruction=get_travel_assistant_prompt(),
        tools=[mcp_tools],
    )
