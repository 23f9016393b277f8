# =============================================================================
# main.py  -  Interactive entry point for the RDW vehicle assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (OPENROUTER_API_KEY, optional RDW_AGENT_MODEL, ...)
#   2. Creates the Google ADK agent (agent/rdw_agent.py), which spawns the
#      RDW MCP tool server over stdio
#   3. Reads questions from the terminal and streams them to the agent
#   4. Prints each tool call and the agent's final answer
#
# The MCP tool server itself does not need this file; hosts such as Claude
# Desktop or any other MCP client can start it directly with `rdw-mcp`.
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm reads its API key from the
# environment when it initializes.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.rdw_agent import create_agent

APP_NAME = "rdw_assistant"
USER_ID = "local_user"


async def run_agent():
    """Run the RDW assistant in an interactive terminal loop."""
    print("=" * 70)
    print("  RDW VEHICLE ASSISTANT")
    print("  Dutch vehicle registration data via MCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about a Dutch license plate (e.g. 'What car is N-500-FV?')")
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
