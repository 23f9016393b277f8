# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic for the RDW vehicle data tools.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK or any other
#   orchestration framework.  The only third-party import is httpx, in the
#   dataset client.  Everything else - normalization, aggregation, report
#   rendering - is plain Python and testable without a network.
#
#   rdw_client  ->  normalizer  ->  aggregator  ->  report
# =============================================================================
