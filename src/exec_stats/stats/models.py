"""Immutable value types for organization execution statistics.

``OrgExecutionStats`` is the snapshot handed to the aggregator by the
statistics store. ``ExecutionWindowStats`` and ``ChartRollup`` are what the
aggregator hands back.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class DailyStatistic:
    """Counters for one completed day.

    Position in ``OrgExecutionStats.history`` encodes recency (oldest first).
    ``day`` is optional and only used by the store to verify that ordering.
    """

    workflow_executions: int = 0
    workflow_executions_finished: int = 0
    app_executions: int = 0
    app_executions_failed: int = 0
    day: Optional[date] = None


@dataclass(frozen=True)
class OrgExecutionStats:
    """Statistics snapshot for one organization."""

    org_id: str = ""

    # Today so far; not yet appended to history
    daily_workflow_executions: int = 0
    daily_workflow_executions_finished: int = 0
    daily_app_executions: int = 0
    daily_app_executions_failed: int = 0

    # Store-maintained monthly totals
    monthly_workflow_executions: int = 0
    monthly_workflow_executions_finished: int = 0
    monthly_app_executions: int = 0
    monthly_app_executions_failed: int = 0

    total_api_usage: int = 0
    daily_api_usage: int = 0

    history: Tuple[DailyStatistic, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but freeze it so the snapshot can't change mid-call
        if not isinstance(self.history, tuple):
            object.__setattr__(self, "history", tuple(self.history))


@dataclass(frozen=True)
class ExecutionWindowStats:
    """Rollup for one window. ``total`` is always ``success + failure``."""

    success: int
    failure: int

    @property
    def total(self) -> int:
        return self.success + self.failure

    def to_dict(self) -> dict:
        return {"total": self.total, "success": self.success, "failure": self.failure}


@dataclass(frozen=True)
class ChartRollup:
    day: ExecutionWindowStats
    week: ExecutionWindowStats
    month: ExecutionWindowStats

    def to_dict(self) -> dict:
        return {
            "day": self.day.to_dict(),
            "week": self.week.to_dict(),
            "month": self.month.to_dict(),
        }
