"""
Dashboard aggregation - fans the five dashboard queries out over the pool
and joins their rows into a single DashboardPayload.
"""

import asyncio
import logging
from typing import Any, Protocol

from services.api.queries import BRAND_QUERY, CHART_QUERY, STATE_QUERY, STATION_QUERY, YEAR_QUERY
from utils.schemas import ChartRow, DashboardPayload, Filters, StationRecord

logger = logging.getLogger(__name__)

DASHBOARD_QUERIES = (CHART_QUERY, BRAND_QUERY, STATE_QUERY, YEAR_QUERY, STATION_QUERY)


class RowSource(Protocol):
    async def fetch_all(self, query: str) -> list[dict[str, Any]]: ...


async def fetch_dashboard(db: RowSource) -> DashboardPayload:
    """Run all dashboard queries concurrently and assemble the envelope.

    Args:
        db: Store client exposing fetch_all()

    Returns:
        DashboardPayload with chart rows, stations and filter options

    Raises:
        Exception: The first query failure; no partial payload is built
    """
    tasks = [asyncio.ensure_future(db.fetch_all(query)) for query in DASHBOARD_QUERIES]
    try:
        chart_rows, brand_rows, state_rows, year_rows, station_rows = await asyncio.gather(*tasks)
    except BaseException:
        # Release the pooled connections still held by the other queries.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    payload = DashboardPayload(
        chartData=[ChartRow(**row) for row in chart_rows],
        stationData=[StationRecord(**row) for row in station_rows],
        filters=Filters(
            brands=[row["brand"] for row in brand_rows],
            states=[row["state"] for row in state_rows],
            years=[str(row["year"]) for row in year_rows],
        ),
    )

    logger.debug(
        "Dashboard assembled: chart_rows=%d, stations=%d, brands=%d, states=%d, years=%d",
        len(payload.chartData),
        len(payload.stationData),
        len(payload.filters.brands),
        len(payload.filters.states),
        len(payload.filters.years),
    )
    return payload
