# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers around core/.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between an MCP host and the RDW core.
#   Each tool:
#     1. Validates and normalizes its arguments
#     2. Calls the aggregator in core/
#     3. Renders the result as text for the agent
#     4. Turns every failure into a text answer or a ToolError
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT merge or interpret RDW fields (that's core/normalizer.py)
#   - They do NOT format sections (that's core/report.py)
#   - They do NOT know which agent framework is calling them
# =============================================================================
