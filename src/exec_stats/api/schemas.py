"""Response schemas for the dashboard API."""

from typing import Any, List, Optional

from pydantic import BaseModel

from ..stats.models import ChartRollup, ExecutionWindowStats


class DashboardResponse(BaseModel):
    """Envelope shared by every dashboard reply."""

    success: bool
    reason: Optional[str] = None
    data: Optional[Any] = None


class WorkflowsData(BaseModel):
    workflows: int
    unexecuted_workflows: int


class AppsData(BaseModel):
    apps: int


class ApiUsageData(BaseModel):
    total_api_usage: int
    daily_api_usage: int


class WorkflowExecutionsData(BaseModel):
    workflow_executions: int
    workflow_executions_finished: int
    workflow_executions_failed: int
    daily_workflow_executions: List[int]


class WindowStatsData(BaseModel):
    total: int
    success: int
    failure: int

    @classmethod
    def from_window(cls, window: ExecutionWindowStats) -> "WindowStatsData":
        return cls(**window.to_dict())


class ChartRollupData(BaseModel):
    day: WindowStatsData
    week: WindowStatsData
    month: WindowStatsData

    @classmethod
    def from_rollup(cls, rollup: ChartRollup) -> "ChartRollupData":
        return cls(
            day=WindowStatsData.from_window(rollup.day),
            week=WindowStatsData.from_window(rollup.week),
            month=WindowStatsData.from_window(rollup.month),
        )
