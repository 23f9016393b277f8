# =============================================================================
# core/rdw_client.py  -  RDW Open Data (Socrata) dataset client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues ONE read request against a named RDW dataset and hands back the
#   rows.  That's all.  It knows nothing about vehicles, precedence rules or
#   reports.
#
#   GET {RDW_API_BASE}/{dataset_id}.json?kenteken=N500FV
#
# FAILURE CONTRACT:
#   fetch() never raises for upstream problems.  Network errors, non-2xx
#   statuses and malformed bodies all come back as None ("failure"), with a
#   WARNING in the log.  An empty list means the request worked but nothing
#   matched.  Callers above the aggregator treat both as "no data".
#
# WHY httpx.AsyncClient?
#   The aggregator fans out several auxiliary requests at once.  An async
#   client lets those run concurrently on one event loop without threads.
# =============================================================================

import logging
from typing import Mapping, Optional

import httpx

from core.config import RDW_API_BASE, USER_AGENT
from core.models import DatasetRow

logger = logging.getLogger(__name__)


class RDWClient:
    """Thin async wrapper around the RDW Socrata JSON endpoints."""

    def __init__(
        self,
        base_url: str = RDW_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        # Only used by tests (httpx.MockTransport); None means real network.
        self._transport = transport

    def dataset_url(self, dataset_id: str) -> str:
        return f"{self.base_url}/{dataset_id}.json"

    async def fetch(
        self,
        dataset_id: str,
        filters: Optional[Mapping[str, str]] = None,
    ) -> Optional[list[DatasetRow]]:
        """Fetch the rows of `dataset_id` matching `filters`.

        Args:
            dataset_id: Socrata dataset id, e.g. "m9d7-ebf2".
            filters: Column/value equality filters plus SoQL parameters
                such as "$limit".  Values are sent as strings.

        Returns:
            The list of row objects, or None if the request failed.
        """
        url = self.dataset_url(dataset_id)
        params = {key: str(value) for key, value in (filters or {}).items()}

        async with httpx.AsyncClient(headers=self.headers, transport=self._transport) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                logger.warning("RDW request to %s failed: HTTP %s", dataset_id, e.response.status_code)
                return None
            except httpx.HTTPError as e:
                logger.warning("RDW request to %s failed: %s", dataset_id, e)
                return None
            except ValueError as e:
                logger.warning("RDW response from %s is not valid JSON: %s", dataset_id, e)
                return None

        if not isinstance(payload, list):
            logger.warning("RDW response from %s is not a JSON array", dataset_id)
            return None

        rows = [row for row in payload if isinstance(row, dict)]
        logger.debug("RDW %s %s -> %d rows", dataset_id, params, len(rows))
        return rows


# Shared default instance, used when callers don't inject their own client.
rdw_client = RDWClient()
