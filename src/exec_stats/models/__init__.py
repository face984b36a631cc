"""Database models for Exec Stats."""

from .base import Base
from .organization import Organization, OrgMember
from .org_statistics import OrgStatistics, DailyStatisticRow
from .workflow import Workflow, WorkflowExecution, WorkflowApp, ExecutionStatus

__all__ = [
    "Base",
    "Organization",
    "OrgMember",
    "OrgStatistics",
    "DailyStatisticRow",
    "Workflow",
    "WorkflowExecution",
    "WorkflowApp",
    "ExecutionStatus",
]
