# =============================================================================
# agent/__init__.py
# =============================================================================
# The Google ADK agent that sits on top of the RDW tools.
#
# ARCHITECTURAL ROLE:
#   The agent is one possible MCP host for tools/mcp_server.py.  It:
#     1. Receives a question ("Mag deze auto een caravan trekken?")
#     2. Decides which RDW tool answers it
#     3. Reads the text report that comes back
#     4. Answers in plain language
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the data access (that's core/rdw_client.py)
#   - It is NOT the merge or report logic (that's core/)
#   - Nothing in core/ or tools/ imports from here
# =============================================================================
