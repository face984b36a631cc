"""Exception types surfaced by the dashboard API.

Each error carries the HTTP status the dashboard envelope is returned with.
The aggregator itself only raises ``InvalidWindowError`` (see ``stats.windows``).
"""


class ExecStatsError(Exception):
    """Base exception for all dashboard errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(ExecStatsError):
    """Missing, malformed or expired credentials."""

    status_code = 401


class OrgAccessError(ExecStatsError):
    """Caller is not a member of the organization and has no support access."""

    status_code = 401


class OrgNotFoundError(OrgAccessError):
    """The caller's active organization does not exist."""

    def __init__(self, org_id: str):
        self.org_id = org_id
        super().__init__(f"Organization {org_id} not found")


class StatisticsNotFoundError(ExecStatsError):
    """No statistics record has been materialized for the organization."""

    def __init__(self, org_id: str):
        self.org_id = org_id
        super().__init__(f"No statistics found for organization {org_id}")
