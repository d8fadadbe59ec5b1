"""Read-only report endpoints."""

from datetime import date
from typing import Any

import structlog

from service_catalog.errors import ApiError
from service_catalog.models import Release, RiskReport, Service
from service_catalog.resource import StatefulClient

logger = structlog.get_logger()

INVALID_SERVICE_MESSAGE = "Invalid service id."
SERVICE_NOT_FOUND_MESSAGE = "The service was not found."
RISK_MESSAGES = {400: INVALID_SERVICE_MESSAGE, 404: SERVICE_NOT_FOUND_MESSAGE}


def _format_day(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value


class ReportsClient(StatefulClient[Any]):
    """Single-shot report reads: service risk, services of a team, releases in a date range.

    None of these touch cached list state; results are returned directly.
    """

    resource = "reports"

    async def get_service_risk(self, service_id: str) -> RiskReport:
        """Fetch the derived risk report for a service.

        Raises:
            ApiError: Always re-raised after recording a message; 400 and 404
                get dedicated messages
        """
        logger.info("Fetching service risk report", service_id=service_id)
        async with self.tracking():
            try:
                data = await self.api.get(f"/reports/services/{service_id}/risk")
            except ApiError as e:
                self.fail(e, "Failed to load service risk report.", message=RISK_MESSAGES.get(e.status))
                raise
            return RiskReport.from_dict(data if isinstance(data, dict) else {})

    async def get_services_by_team(self, team_id: str) -> list[Service]:
        """List the services owned by a team. A 404 yields an empty list."""
        logger.info("Fetching services for team", team_id=team_id)
        async with self.tracking():
            try:
                data = await self.api.get(f"/teams/{team_id}/services")
            except ApiError as e:
                if e.status == 404:
                    logger.warning("Team has no services", team_id=team_id)
                    return []
                self.fail(e, "Failed to load services for team.")
                raise
            if not isinstance(data, list):
                return []
            return [Service.from_dict(item) for item in data if isinstance(item, dict)]

    async def get_releases_in_range(
        self,
        start_date: date | str,
        end_date: date | str,
        page: int = 1,
        page_size: int = 25,
    ) -> list[Release]:
        """List releases across all services between two dates."""
        start, end = _format_day(start_date), _format_day(end_date)
        logger.info("Fetching releases in range", start=start, end=end, page=page, page_size=page_size)
        async with self.tracking():
            try:
                data = await self.api.get(
                    f"/releases/{start}/{end}",
                    params={"page": page or 1, "pageSize": page_size or 25},
                )
            except ApiError as e:
                self.fail(e, "Failed to load releases.")
                raise
            if not isinstance(data, list):
                return []
            return [Release.from_dict(item) for item in data if isinstance(item, dict)]
