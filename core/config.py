# =============================================================================
# core/config.py  -  Static configuration for the RDW open-data layer
# =============================================================================
#
# Everything the core needs to know about the upstream RDW Socrata API lives
# here: the host, the dataset identifiers, the fixed request headers and the
# bounds of the search tool.
#
# ENVIRONMENT OVERRIDES:
#   RDW_API_BASE       -> alternative base URL (e.g. a local mirror or proxy)
#   RDW_MCP_LOG_LEVEL  -> log level of the MCP tool server (default INFO)
#
#   Values are read once, at import time.  There is no configuration file.
# =============================================================================

import os

RDW_API_BASE = os.environ.get("RDW_API_BASE", "https://opendata.rdw.nl/resource").rstrip("/")
USER_AGENT = "RDW-MCP-Server/1.0"

LOG_LEVEL = os.environ.get("RDW_MCP_LOG_LEVEL", "INFO").upper()

# --- Dataset identifiers (Socrata "4x4" ids) ---
BASE_DATASET = "m9d7-ebf2"   # Gekentekende_voertuigen
FUEL_DATASET = "8ys7-d773"   # Gekentekende_voertuigen_brandstof
AXLE_DATASET = "3huj-srit"   # Gekentekende_voertuigen_assen
BODY_DATASET = "vezc-m2t6"   # Gekentekende_voertuigen_carrosserie

# --- Search bounds ---
SEARCH_DEFAULT_LIMIT = 10
SEARCH_MIN_LIMIT = 1
SEARCH_MAX_LIMIT = 100
