"""Windowed execution statistics."""

from .aggregator import (
    Metric,
    build_chart_rollup,
    build_daily_series,
    build_workflow_executions_report,
)
from .models import ChartRollup, DailyStatistic, ExecutionWindowStats, OrgExecutionStats
from .windows import DAY_LENGTH, MONTH_LENGTH, WEEK_LENGTH, InvalidWindowError

__all__ = [
    "Metric",
    "build_chart_rollup",
    "build_daily_series",
    "build_workflow_executions_report",
    "ChartRollup",
    "DailyStatistic",
    "ExecutionWindowStats",
    "OrgExecutionStats",
    "DAY_LENGTH",
    "WEEK_LENGTH",
    "MONTH_LENGTH",
    "InvalidWindowError",
]
