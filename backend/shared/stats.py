"""Warrior statistics aggregation."""

import json
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Protocol

from .exceptions import DatabaseError, QueryStageError

logger = logging.getLogger(__name__)

# Stage names, in execution order
STAGE_ACTIVE = "active"
STAGE_INACTIVE = "inactive"
STAGE_TOTAL = "total"
STAGE_BY_STATUS = "by_status"

STAGE_MESSAGES = {
    STAGE_ACTIVE: "Failed to fetch active warriors count",
    STAGE_INACTIVE: "Failed to fetch inactive warriors count",
    STAGE_TOTAL: "Failed to fetch total warriors count",
    STAGE_BY_STATUS: "Failed to fetch warrior status counts",
}


class StatsClient(Protocol):
    """Read operations the aggregation needs from a database client."""

    def count(self, table: str, filters: Optional[dict[str, Any]] = None) -> Optional[int]:
        ...

    def select(
        self,
        table: str,
        columns: str,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        ...


@dataclass
class StatsResult:
    """Active/inactive/total warrior counts plus active counts by status."""

    active: int = 0
    inactive: int = 0
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "inactive": self.inactive,
            "total": self.total,
            "by_status": dict(self.by_status),
        }


def count_by_status(rows: Optional[Iterable[dict[str, Any]]]) -> dict[str, int]:
    """
    Count rows per status label.

    Args:
        rows: Rows with a "status" key, or None

    Returns:
        Mapping of status to number of rows. Null statuses are keyed "null".
    """
    counts: defaultdict[str, int] = defaultdict(int)
    for row in rows or ():
        status = row.get("status")
        counts["null" if status is None else str(status)] += 1
    return dict(counts)


def _run_stage(stage: str, query: Callable[[], Any]) -> Any:
    try:
        return query()
    except DatabaseError as e:
        logger.error(json.dumps({
            "action": "warrior_stats_query_failed",
            "stage": stage,
            "error": str(e),
        }))
        raise QueryStageError(stage, STAGE_MESSAGES[stage]) from e


def gather_warrior_stats(client: StatsClient, table: str = "warriors") -> StatsResult:
    """
    Run the four stats queries in order and aggregate the results.

    Stops at the first failing query; later queries are not issued.

    Args:
        client: Database client with count() and select()
        table: Warriors table name

    Returns:
        StatsResult

    Raises:
        QueryStageError: If any query fails
    """
    stages: list[tuple[str, Callable[[], Any]]] = [
        (STAGE_ACTIVE, lambda: client.count(table, {"is_active": True})),
        (STAGE_INACTIVE, lambda: client.count(table, {"is_active": False})),
        (STAGE_TOTAL, lambda: client.count(table)),
        (STAGE_BY_STATUS, lambda: client.select(table, "status", {"is_active": True}, order="id")),
    ]

    results = {}
    for stage, query in stages:
        results[stage] = _run_stage(stage, query)

    return StatsResult(
        active=results[STAGE_ACTIVE] or 0,
        inactive=results[STAGE_INACTIVE] or 0,
        total=results[STAGE_TOTAL] or 0,
        by_status=count_by_status(results[STAGE_BY_STATUS]),
    )
