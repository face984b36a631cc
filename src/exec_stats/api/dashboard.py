"""Dashboard endpoints for organization execution statistics."""

import logging

from fastapi import APIRouter, Depends

from ..config import get_settings
from ..database.statistics_store import StatisticsStore
from ..security.auth import AuthContext, get_statistics_store, require_org_access
from ..stats.aggregator import Metric, build_chart_rollup, build_workflow_executions_report
from .schemas import (
    ApiUsageData,
    AppsData,
    ChartRollupData,
    DashboardResponse,
    WorkflowExecutionsData,
    WorkflowsData,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_RESPONSE_OPTIONS = {"response_model": DashboardResponse, "response_model_exclude_none": True}


@router.get("/test/success", **_RESPONSE_OPTIONS)
async def dashboard_test_success():
    """Example success envelope for client integration. No auth."""
    return DashboardResponse(success=True, data="this field can be any type")


@router.get("/test/failure", **_RESPONSE_OPTIONS)
async def dashboard_test_failure():
    """Example failure envelope for client integration. No auth."""
    return DashboardResponse(success=False, reason="failed because something happened")


@router.get("/workflows", **_RESPONSE_OPTIONS)
async def dashboard_workflows(
    user: AuthContext = Depends(require_org_access),
    store: StatisticsStore = Depends(get_statistics_store),
):
    """Workflows in the organization and how many were never executed."""
    workflows = await store.list_workflows(user.active_org_id)

    unexecuted = 0
    for workflow in workflows:
        # One execution is enough to know it has run
        if await store.count_workflow_executions(workflow.id, limit=1) == 0:
            unexecuted += 1

    return DashboardResponse(
        success=True,
        data=WorkflowsData(workflows=len(workflows), unexecuted_workflows=unexecuted),
    )


@router.get("/apps", **_RESPONSE_OPTIONS)
async def dashboard_apps(
    user: AuthContext = Depends(require_org_access),
    store: StatisticsStore = Depends(get_statistics_store),
):
    """Apps the organization has access to."""
    apps = await store.list_apps(user.active_org_id, limit=get_settings().max_app_count)
    return DashboardResponse(success=True, data=AppsData(apps=len(apps)))


@router.get("/api-usage", **_RESPONSE_OPTIONS)
async def dashboard_api_usage(
    user: AuthContext = Depends(require_org_access),
    store: StatisticsStore = Depends(get_statistics_store),
):
    """Total and daily API usage for the organization."""
    stats = await store.get_org_statistics(user.active_org_id)
    return DashboardResponse(
        success=True,
        data=ApiUsageData(
            total_api_usage=stats.total_api_usage,
            daily_api_usage=stats.daily_api_usage,
        ),
    )


@router.get("/workflow-executions", **_RESPONSE_OPTIONS)
async def dashboard_workflow_executions(
    user: AuthContext = Depends(require_org_access),
    store: StatisticsStore = Depends(get_statistics_store),
):
    """Monthly workflow totals and daily counts, most recent day first."""
    stats = await store.get_org_statistics(user.active_org_id)
    report = build_workflow_executions_report(
        stats, window_length=get_settings().dashboard_month_length
    )
    return DashboardResponse(success=True, data=WorkflowExecutionsData(**report))


@router.get("/charts/{metric}", **_RESPONSE_OPTIONS)
async def dashboard_chart(
    metric: Metric,
    user: AuthContext = Depends(require_org_access),
    store: StatisticsStore = Depends(get_statistics_store),
):
    """Day, week and month success/failure rollups for one metric."""
    stats = await store.get_org_statistics(user.active_org_id)
    rollup = build_chart_rollup(
        stats, metric, week_length=get_settings().dashboard_week_length
    )
    logger.debug("Built %s chart rollup for org %s", metric.value, user.active_org_id)
    return DashboardResponse(success=True, data=ChartRollupData.from_rollup(rollup))
