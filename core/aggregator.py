# =============================================================================
# core/aggregator.py  -  Vehicle lookup orchestration
# =============================================================================
#
# HOW A LOOKUP WORKS (the flow):
#   1. Normalize + validate the plate             ("n-500 fv" -> "N500FV")
#   2. Fetch the BASE dataset                     (no rows -> "not found")
#   3. Fan out the AUXILIARY fetches in parallel  (fuel, axles, bodies)
#   4. Merge base + first fuel row into a VehicleRecord (core/normalizer.py)
#   5. Return the record with the raw auxiliary rows for the report
#
# CONCURRENCY:
#   Step 3 uses asyncio.gather: every auxiliary request starts at once and
#   we wait for all of them.  A failing auxiliary fetch never cancels the
#   others and never fails the lookup - its category is just empty.
#
# VALIDATION:
#   Bad input raises InvalidQueryError BEFORE any request goes out.
# =============================================================================

import asyncio
import logging
from typing import Optional

from core.config import (
    AXLE_DATASET,
    BASE_DATASET,
    BODY_DATASET,
    FUEL_DATASET,
    SEARCH_DEFAULT_LIMIT,
    SEARCH_MAX_LIMIT,
    SEARCH_MIN_LIMIT,
)
from core.models import (
    DatasetRow,
    InvalidQueryError,
    VehicleDetails,
    VehicleRecord,
    normalize_kenteken,
)
from core.normalizer import build_record
from core.rdw_client import RDWClient, rdw_client

logger = logging.getLogger(__name__)

# Auxiliary datasets and the column that orders their rows.
_AUXILIARY = {
    "fuel": (FUEL_DATASET, "brandstof_volgnummer"),
    "axles": (AXLE_DATASET, "as_nummer"),
    "bodies": (BODY_DATASET, "carrosserie_volgnummer"),
}


def validate_kenteken(kenteken: str) -> str:
    """Normalize a plate and reject it if nothing is left."""
    clean = normalize_kenteken(kenteken)
    if not clean:
        raise InvalidQueryError("License plate (kenteken) must not be empty.")
    return clean


def validate_limit(limit: int) -> int:
    """Check the search result cap (1..100)."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidQueryError(f"limit must be an integer, got {limit!r}.")
    if not SEARCH_MIN_LIMIT <= limit <= SEARCH_MAX_LIMIT:
        raise InvalidQueryError(
            f"limit must be between {SEARCH_MIN_LIMIT} and {SEARCH_MAX_LIMIT}, got {limit}."
        )
    return limit


def _sequence_key(column: str):
    """Sort key for rows numbered by `column` (numeric first, then text)."""
    def key(row: DatasetRow):
        value = str(row.get(column) or "").strip()
        if value.isdigit():
            return (0, int(value), "")
        return (1, 0, value)
    return key


def _ordered(rows: list[DatasetRow], column: str) -> list[DatasetRow]:
    # sorted() is stable, so rows without a sequence number keep upstream order.
    return sorted(rows, key=_sequence_key(column))


async def _fetch_auxiliary(client: RDWClient, kenteken: str) -> dict[str, list[DatasetRow]]:
    names = list(_AUXILIARY)
    results = await asyncio.gather(
        *(client.fetch(_AUXILIARY[name][0], {"kenteken": kenteken}) for name in names),
        return_exceptions=True,
    )

    auxiliary: dict[str, list[DatasetRow]] = {}
    for name, result in zip(names, results):
        dataset_id, order_column = _AUXILIARY[name]
        if isinstance(result, BaseException):
            logger.warning("Auxiliary fetch %s (%s) for %s raised: %r", name, dataset_id, kenteken, result)
            result = None
        if result is None:
            logger.info("No %s data for %s (request failed)", name, kenteken)
        auxiliary[name] = _ordered(result or [], order_column)
    return auxiliary


async def lookup_with_details(
    kenteken: str,
    client: Optional[RDWClient] = None,
) -> Optional[VehicleDetails]:
    """Look up a vehicle and everything the report needs about it.

    Args:
        kenteken: License plate in any common notation ("12-ABC-3", "12abc3").
        client: RDW client to use; defaults to the shared instance.

    Returns:
        VehicleDetails, or None when the base dataset has no row for the
        plate (or could not be reached - the two are not distinguished).

    Raises:
        InvalidQueryError: If the plate is empty after normalization.
    """
    clean = validate_kenteken(kenteken)
    client = client or rdw_client

    base_rows = await client.fetch(BASE_DATASET, {"kenteken": clean})
    if not base_rows:
        logger.info("No base record for %s (%s)", clean, "request failed" if base_rows is None else "0 rows")
        return None

    # Only the first row is used; RDW returns one row per plate in practice.
    base_row = base_rows[0]

    auxiliary = await _fetch_auxiliary(client, clean)
    fuel_rows = auxiliary["fuel"]
    record = build_record(base_row, fuel_rows[0] if fuel_rows else None)

    return VehicleDetails(
        record=record,
        fuel=fuel_rows,
        axles=auxiliary["axles"],
        bodies=auxiliary["bodies"],
    )


async def lookup(kenteken: str, client: Optional[RDWClient] = None) -> Optional[VehicleRecord]:
    """Like lookup_with_details(), but return only the merged record."""
    details = await lookup_with_details(kenteken, client)
    return details.record if details else None


async def fetch_fuel_emissions(kenteken: str, client: Optional[RDWClient] = None) -> list[DatasetRow]:
    """Fetch every fuel/emissions row for a plate, ordered by fuel sequence.

    Returns an empty list both when there are no rows and when the request
    failed.
    """
    clean = validate_kenteken(kenteken)
    client = client or rdw_client

    rows = await client.fetch(FUEL_DATASET, {"kenteken": clean})
    _, order_column = _AUXILIARY["fuel"]
    return _ordered(rows or [], order_column)


async def search(
    brand: str,
    model: Optional[str] = None,
    limit: int = SEARCH_DEFAULT_LIMIT,
    client: Optional[RDWClient] = None,
) -> list[VehicleRecord]:
    """Search the base dataset by brand (and optionally trade name).

    Both filters are exact, upper-cased matches - RDW stores "VOLKSWAGEN",
    not "Volkswagen".

    Raises:
        InvalidQueryError: Empty brand or limit outside 1..100.
    """
    validate_limit(limit)
    brand_filter = (brand or "").strip().upper()
    if not brand_filter:
        raise InvalidQueryError("brand must not be empty.")

    params = {"merk": brand_filter, "$limit": str(limit)}
    model_filter = (model or "").strip().upper()
    if model_filter:
        params["handelsbenaming"] = model_filter

    client = client or rdw_client
    rows = await client.fetch(BASE_DATASET, params)
    if rows is None:
        logger.info("Search %s failed upstream", params)
    return [build_record(row) for row in (rows or [])]
