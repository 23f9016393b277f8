# =============================================================================
# agent/rdw_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that answers questions about Dutch vehicles
#   by calling the RDW tools of tools/mcp_server.py.
#
#   ┌──────────────────────────┐     stdio      ┌─────────────────────┐
#   │  ADK Agent               │ ─────────────▶ │  FastMCP Server     │
#   │  (LiteLlm model + prompt)│ ◀───────────── │  (tools/mcp_server) │
#   └──────────────────────────┘                └─────────────────────┘
#                                                          │
#                                                          ▼
#                                               ┌─────────────────────┐
#                                               │  core/  ->  RDW API │
#                                               └─────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess (same interpreter, run as a
#   module from the project root) and talks to it over stdin/stdout.
#
# MODEL:
#   Any LiteLlm model string works.  The default routes GPT-4o through
#   OpenRouter; override it with RDW_AGENT_MODEL.  LiteLlm reads the
#   provider key (e.g. OPENROUTER_API_KEY) from the environment.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool.mcp_toolset import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_rdw_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent(model: Optional[str] = None) -> Agent:
    """Create the RDW assistant agent.

    Args:
        model: LiteLlm model string.  Falls back to $RDW_AGENT_MODEL, then
            DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent with the RDW tool server attached.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    model_name = model or os.environ.get("RDW_AGENT_MODEL", DEFAULT_MODEL)

    return Agent(
        name="rdw_vehicle_assistant",
        model=LiteLlm(model=model_name),
        instruction=get_rdw_assistant_prompt(),
        tools=[mcp_tools],
    )
