# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL RDW tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the MCP tools an agent can call to query Dutch RDW vehicle
#   registration data.  Each tool is a thin wrapper around core/ - it
#   validates input, calls the aggregator, renders the text report and
#   contains every failure.
#
# HOW IT WORKS (the flow):
#   1. The agent host decides it needs vehicle data
#   2. It calls a tool by name via MCP (e.g., "rdw-license-plate-lookup")
#   3. FastMCP routes the call to the matching function below
#   4. The function calls core/ (aggregator -> normalizer -> report)
#   5. The agent receives one block of plain text
#
# ERROR CONTRACT:
#   - "Not found" is an ordinary text answer, not an error.
#   - Invalid input (empty plate, limit outside 1..100) becomes a ToolError,
#     which the host sees as an isError tool result.
#   - Anything unexpected is logged with its traceback and turned into an
#     "Error ..." text answer.  A tool call never takes the server down.
#
# RUNNING THIS SERVER:
#     a) Standalone:           python -m tools.mcp_server   (or: rdw-mcp)
#     b) From the host agent:  spawned over stdio by agent/rdw_agent.py
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.aggregator import fetch_fuel_emissions, lookup_with_details, search, validate_kenteken
from core.config import LOG_LEVEL, SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT, SEARCH_MIN_LIMIT
from core.models import InvalidQueryError
from core.report import render_fuel_report, render_lookup, render_search

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP JSON stream, so every log line goes to STDERR.
#
#   CYAN   -> incoming tool calls
#   GREEN  -> responses
#   YELLOW -> intermediate status
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line and size of a text response in GREEN, then return it."""
    first_line = text.split("\n", 1)[0]
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


def _reject(tool_name: str, error: InvalidQueryError) -> ToolError:
    _log_status(f"Rejected input: {error}")
    return ToolError(f"{tool_name}: {error}")


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("rdw-mcp")

Kenteken = Annotated[
    str,
    Field(min_length=1, description="Dutch license plate (kenteken) to look up, e.g. 'N-500-FV'"),
]


# =============================================================================
# TOOL 1: rdw-license-plate-lookup
# =============================================================================
# The main tool.  One call returns everything RDW knows about a plate:
# base registration, fuel/emissions, axles and bodywork, merged into a
# single report.
# =============================================================================
async def license_plate_lookup(kenteken: Kenteken) -> str:
    """Look up Dutch vehicle information by license plate.

    Returns a composite report with sections for basic information,
    appearance, capacity, technical specifications, weights & towing,
    registration, inspection (APK) and - when RDW has the data - dimensions,
    financial data, status indicators, fuel & emissions, axles and bodywork.

    Args:
        kenteken: The license plate; spaces, hyphens and case don't matter.
    """
    tool_name = "rdw-license-plate-lookup"
    _log_request(tool_name, kenteken=kenteken)

    try:
        clean = validate_kenteken(kenteken)
        details = await lookup_with_details(clean)
    except InvalidQueryError as e:
        raise _reject(tool_name, e) from e
    except Exception as e:
        logging.exception(f"{tool_name} failed")
        return _log_response(tool_name, f"Error retrieving vehicle information: {e}")

    if details is None:
        _log_status("No base record")
        return _log_response(tool_name, f"No vehicle found for license plate: {clean}")

    _log_status(
        f"Found {details.record.brand} {details.record.model}: "
        f"{len(details.fuel)} fuel, {len(details.axles)} axle, {len(details.bodies)} body rows"
    )
    try:
        text = render_lookup(clean, details)
    except Exception as e:
        logging.exception(f"{tool_name} failed while rendering")
        return _log_response(tool_name, f"Error retrieving vehicle information: {e}")
    return _log_response(tool_name, text)


# =============================================================================
# TOOL 2: rdw-fuel-emissions
# =============================================================================
# Narrower than the lookup: only the fuel/emissions dataset.  Cheaper when
# the agent just needs CO2 or emission class for a plate.
# =============================================================================
async def fuel_emissions(kenteken: Kenteken) -> str:
    """Get fuel type and emissions data for a Dutch vehicle.

    Returns one block per fuel (hybrids have two) with the emission level,
    CO2 class and figures, net power and sound levels.

    Args:
        kenteken: The license plate; spaces, hyphens and case don't matter.
    """
    tool_name = "rdw-fuel-emissions"
    _log_request(tool_name, kenteken=kenteken)

    try:
        clean = validate_kenteken(kenteken)
        rows = await fetch_fuel_emissions(clean)
        if not rows:
            _log_status("No fuel rows")
            return _log_response(tool_name, f"No fuel/emissions data found for license plate: {clean}")
        text = render_fuel_report(clean, rows)
    except InvalidQueryError as e:
        raise _reject(tool_name, e) from e
    except Exception as e:
        logging.exception(f"{tool_name} failed")
        return _log_response(tool_name, f"Error retrieving fuel/emissions data: {e}")

    _log_status(f"Found {len(rows)} fuel row(s)")
    return _log_response(tool_name, text)


# =============================================================================
# TOOL 3: rdw-vehicle-search
# =============================================================================
# Exact-match search on brand and (optionally) trade name.  The limit is
# capped at 100 so a single call can't flood the agent's context.
# =============================================================================
async def vehicle_search(
    brand: Annotated[str, Field(min_length=1, description="Vehicle brand (e.g., 'VOLKSWAGEN', 'BMW')")],
    model: Annotated[Optional[str], Field(description="Optional: vehicle model / trade name")] = None,
    limit: Annotated[
        int,
        Field(
            ge=SEARCH_MIN_LIMIT,
            le=SEARCH_MAX_LIMIT,
            description=f"Maximum number of results ({SEARCH_MIN_LIMIT}-{SEARCH_MAX_LIMIT}, default {SEARCH_DEFAULT_LIMIT})",
        ),
    ] = SEARCH_DEFAULT_LIMIT,
) -> str:
    """Search for Dutch vehicles by brand and optionally model.

    Returns a numbered list of vehicle reports (base registration data
    only - use rdw-license-plate-lookup on a plate for the full picture).

    Args:
        brand: Brand name as registered, matched case-insensitively.
        model: Trade name, matched case-insensitively.
        limit: Maximum number of vehicles to return.
    """
    tool_name = "rdw-vehicle-search"
    _log_request(tool_name, brand=brand, model=model, limit=limit)
    model = (model or "").strip() or None

    try:
        records = await search(brand, model, limit)
        if not records:
            _log_status("No matches")
            suffix = f" and model: {model}" if model else ""
            return _log_response(tool_name, f"No vehicles found for brand: {brand}{suffix}")
        text = render_search(brand, model, records)
    except InvalidQueryError as e:
        raise _reject(tool_name, e) from e
    except Exception as e:
        logging.exception(f"{tool_name} failed")
        return _log_response(tool_name, f"Error searching vehicles: {e}")

    _log_status(f"Found {len(records)} vehicle(s)")
    return _log_response(tool_name, text)


# =============================================================================
# Tool registration
# =============================================================================
# Registered by call rather than as decorators so the module-level names
# stay plain coroutine functions the tests can await directly.
# =============================================================================
mcp.tool(name="rdw-license-plate-lookup")(license_plate_lookup)
mcp.tool(name="rdw-fuel-emissions")(fuel_emissions)
mcp.tool(name="rdw-vehicle-search")(vehicle_search)


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Run the server on stdio; exit with status 1 if it can't start."""
    try:
        logging.info("RDW MCP Server running on stdio")
        mcp.run()
    except KeyboardInterrupt:
        logging.info("RDW MCP Server stopped")
    except Exception:
        logging.exception("Fatal error in RDW MCP Server")
        sys.exit(1)


if __name__ == "__main__":
    main()
