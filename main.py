# =============================================================================
# main.py  —  Entry Point for the Travel Planning Assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py          (or: travel-agent)
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/travel_agent.py)
#   2. Sets up an interactive session
#   3. Sends each of your messages to the agent
#   4. Shows the tools it calls and its final answer
#
# GOOGLE ADK CONCEPTS USED:
#   - Runner: Manages the agent's execution lifecycle
#   - SessionService: Tracks conversation state across turns
#   - Content/Part: ADK's message format
#   - Event stream: Real-time updates as the agent thinks and acts
#
# The other entry points are the MCP tool server (travel-mcp) and the HTTP
# front end (travel-web).
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads its provider key (OPENROUTER_API_KEY, ...) from the
# environment when the agent is created.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.travel_agent import create_agent

APP_NAME = "travel_assistant"
USER_ID = "demo_user"


async def run_agent():
    """Run the travel planning assistant interactively."""

    print("=" * 70)
    print("  SMART TRAVEL PLANNING ASSISTANT")
    print("  Powered by Google ADK + LiteLlm + FastMCP")
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

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about destinations, trip plans, currency or phrases.")
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

        # Keep the last text part; tool calls are echoed as they happen.
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


def main():
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
