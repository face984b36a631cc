"""Read-side access to organizations, workflows, apps and statistics.

``StatisticsStore`` turns ORM rows into the immutable ``OrgExecutionStats``
snapshot consumed by the aggregator.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import StatisticsNotFoundError
from ..models.organization import Organization, OrgMember
from ..models.org_statistics import DailyStatisticRow, OrgStatistics
from ..models.workflow import Workflow, WorkflowApp, WorkflowExecution
from ..stats.models import DailyStatistic, OrgExecutionStats

logger = logging.getLogger(__name__)


def _parse_id(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def order_history(org_id: str, history: Sequence[DailyStatistic]) -> List[DailyStatistic]:
    """Return history oldest-first.

    Entries are sorted by ``day`` when every entry carries one; otherwise
    positional order is kept. A reorder is logged since the windows depend on it.
    """
    entries = list(history)
    if not entries or any(entry.day is None for entry in entries):
        return entries

    ordered = sorted(entries, key=lambda entry: entry.day)
    if ordered != entries:
        logger.warning(
            "Daily statistics for org %s were not stored oldest-first; reordered %d entries",
            org_id,
            len(entries),
        )
    return ordered


class StatisticsStore:
    """Queries backing the dashboard endpoints, bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_org(self, org_id: str) -> Optional[Organization]:
        oid = _parse_id(org_id)
        if oid is None:
            return None
        return await self.session.get(Organization, oid)

    async def is_member(self, org_id: str, user_id: str) -> bool:
        oid = _parse_id(org_id)
        if oid is None:
            return False
        result = await self.session.execute(
            select(OrgMember.id).where(
                OrgMember.org_id == oid,
                OrgMember.user_id == user_id,
            )
        )
        return result.first() is not None

    async def get_org_statistics(self, org_id: str) -> OrgExecutionStats:
        """Build the statistics snapshot for ``org_id``.

        Raises:
            StatisticsNotFoundError: If the organization has no statistics row.
        """
        oid = _parse_id(org_id)
        row = None
        if oid is not None:
            result = await self.session.execute(
                select(OrgStatistics).where(OrgStatistics.org_id == oid)
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise StatisticsNotFoundError(str(org_id))

        result = await self.session.execute(
            select(DailyStatisticRow).where(DailyStatisticRow.org_id == oid)
        )
        history = [
            DailyStatistic(
                workflow_executions=day_row.workflow_executions,
                workflow_executions_finished=day_row.workflow_executions_finished,
                app_executions=day_row.app_executions,
                app_executions_failed=day_row.app_executions_failed,
                day=day_row.day,
            )
            for day_row in result.scalars().all()
        ]

        return OrgExecutionStats(
            org_id=str(oid),
            daily_workflow_executions=row.daily_workflow_executions,
            daily_workflow_executions_finished=row.daily_workflow_executions_finished,
            daily_app_executions=row.daily_app_executions,
            daily_app_executions_failed=row.daily_app_executions_failed,
            monthly_workflow_executions=row.monthly_workflow_executions,
            monthly_workflow_executions_finished=row.monthly_workflow_executions_finished,
            monthly_app_executions=row.monthly_app_executions,
            monthly_app_executions_failed=row.monthly_app_executions_failed,
            total_api_usage=row.total_api_usage,
            daily_api_usage=row.daily_api_usage,
            history=tuple(order_history(str(oid), history)),
        )

    async def list_workflows(self, org_id: str) -> List[Workflow]:
        oid = _parse_id(org_id)
        if oid is None:
            return []
        result = await self.session.execute(
            select(Workflow).where(Workflow.org_id == oid).order_by(Workflow.name)
        )
        return list(result.scalars().all())

    async def count_workflow_executions(self, workflow_id, limit: Optional[int] = None) -> int:
        """Count executions of a workflow, stopping at ``limit`` when given."""
        query = select(WorkflowExecution.id).where(
            WorkflowExecution.workflow_id == _parse_id(workflow_id)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(
            select(func.count()).select_from(query.subquery())
        )
        return result.scalar() or 0

    async def list_apps(self, org_id: str, limit: int, offset: int = 0) -> List[WorkflowApp]:
        """Apps visible to the organization: public apps plus its own."""
        oid = _parse_id(org_id)
        visibility = WorkflowApp.is_public.is_(True)
        if oid is not None:
            visibility = or_(visibility, WorkflowApp.org_id == oid)
        result = await self.session.execute(
            select(WorkflowApp)
            .where(visibility)
            .order_by(WorkflowApp.name)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())
