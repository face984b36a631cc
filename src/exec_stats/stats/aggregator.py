"""Windowed rollups over an organization statistics snapshot.

All functions here are pure: they read an ``OrgExecutionStats`` snapshot and
return fresh value objects. No I/O and no shared state, so they are safe to
call from concurrent request handlers.

Workflows and apps are instrumented differently upstream. Workflows count
*finished* runs (failure is the complement), apps count *failed* runs
(success is the complement). Each metric keeps its own split strategy below;
swapping them inverts the failure column.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .models import ChartRollup, DailyStatistic, ExecutionWindowStats, OrgExecutionStats
from .windows import MONTH_LENGTH, WEEK_LENGTH, recent_entries, validate_window_length

__all__ = [
    "Metric",
    "build_daily_series",
    "build_chart_rollup",
    "build_workflow_executions_report",
]

Split = Tuple[int, int]  # (success, failure)


class Metric(str, enum.Enum):
    """Execution metrics available for chart rollups."""

    WORKFLOW = "workflow"
    APP = "app"


def _finished_split(total: int, finished: int) -> Split:
    return finished, total - finished


def _failed_split(total: int, failed: int) -> Split:
    success = total - failed
    return success, total - success


@dataclass(frozen=True)
class _MetricStrategy:
    day: Callable[[OrgExecutionStats], Split]
    entry: Callable[[DailyStatistic], Split]
    month: Callable[[OrgExecutionStats], Split]


_STRATEGIES: Dict[Metric, _MetricStrategy] = {
    Metric.WORKFLOW: _MetricStrategy(
        day=lambda s: _finished_split(
            s.daily_workflow_executions, s.daily_workflow_executions_finished
        ),
        entry=lambda e: _finished_split(
            e.workflow_executions, e.workflow_executions_finished
        ),
        month=lambda s: _finished_split(
            s.monthly_workflow_executions, s.monthly_workflow_executions_finished
        ),
    ),
    Metric.APP: _MetricStrategy(
        day=lambda s: _failed_split(
            s.daily_app_executions, s.daily_app_executions_failed
        ),
        entry=lambda e: _failed_split(e.app_executions, e.app_executions_failed),
        month=lambda s: _failed_split(
            s.monthly_app_executions, s.monthly_app_executions_failed
        ),
    ),
}


def build_daily_series(
    stats: OrgExecutionStats, window_length: int = MONTH_LENGTH
) -> List[int]:
    """Daily workflow execution counts, most recent first.

    Element 0 is today's running count. The rest come from ``history``
    walked backward, so the result has ``1 + min(len(history), window_length - 1)``
    elements. Short histories are not padded.

    Raises:
        InvalidWindowError: If ``window_length`` is not a positive integer.
    """
    validate_window_length(window_length)
    series = [stats.daily_workflow_executions]
    series.extend(
        entry.workflow_executions
        for entry in recent_entries(stats.history, window_length)
    )
    return series


def build_chart_rollup(
    stats: OrgExecutionStats,
    metric: Metric,
    week_length: int = WEEK_LENGTH,
) -> ChartRollup:
    """Day, week and month rollups for ``metric``.

    The week sums today with at most ``week_length - 1`` history entries and
    covers fewer days when history is young. The month always comes from the
    store-maintained monthly counters, never from ``history``, which may be
    shorter than the month.
    """
    strategy = _STRATEGIES[Metric(metric)]

    day_success, day_failure = strategy.day(stats)

    week_success, week_failure = day_success, day_failure
    for entry in recent_entries(stats.history, week_length):
        success, failure = strategy.entry(entry)
        week_success += success
        week_failure += failure

    month_success, month_failure = strategy.month(stats)

    return ChartRollup(
        day=ExecutionWindowStats(success=day_success, failure=day_failure),
        week=ExecutionWindowStats(success=week_success, failure=week_failure),
        month=ExecutionWindowStats(success=month_success, failure=month_failure),
    )


def build_workflow_executions_report(
    stats: OrgExecutionStats, window_length: int = MONTH_LENGTH
) -> dict:
    """Monthly workflow totals plus the daily series for the dashboard card."""
    finished = stats.monthly_workflow_executions_finished
    return {
        "workflow_executions": stats.monthly_workflow_executions,
        "workflow_executions_finished": finished,
        "workflow_executions_failed": stats.monthly_workflow_executions - finished,
        "daily_workflow_executions": build_daily_series(stats, window_length),
    }
