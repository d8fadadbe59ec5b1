"""Technical debt resource client."""

import re
from typing import Any

import structlog

from service_catalog.models import DebtItem, DebtStatus, DebtType
from service_catalog.resource import ResourceClient

logger = structlog.get_logger()


class DebtClient(ResourceClient[DebtItem]):
    """Debt items nested under a service.

    Items are listed and created under ``/services/{id}/debt`` but status
    transitions go to the top-level ``/debt/{id}`` endpoint.
    """

    resource = "debt items"
    not_found_code = "DEBT_NOT_FOUND"
    not_found_pattern = re.compile(r"no\s+debt|not\s+found", re.IGNORECASE)
    fallback_message = "Failed to load debt items"

    def collection_path(self, parent_id: str | None = None) -> str:
        if not parent_id:
            raise ValueError("Debt items are listed per service; service id is required")
        return f"/services/{parent_id}/debt"

    def item_path(self, entity_id: str, parent_id: str | None = None) -> str:
        return f"/debt/{entity_id}"

    def parse(self, data: dict[str, Any]) -> DebtItem:
        return DebtItem.from_dict(data)

    async def list_debt(self, service_id: str) -> list[DebtItem]:
        return await self.list_entities(service_id)

    async def create_debt(
        self,
        service_id: str,
        title: str,
        type: DebtType | str | None = None,
        description: str | None = None,
        status: DebtStatus | str | None = None,
    ) -> list[DebtItem]:
        """Record a debt item against a service and return the refreshed list."""
        payload: dict[str, Any] = {"title": title}
        if type is not None:
            payload["type"] = DebtType(type).value
        if description is not None:
            payload["description"] = description
        if status is not None:
            payload["status"] = DebtStatus(status).value
        return await self.create(payload, parent_id=service_id)

    async def update_debt_status(self, service_id: str, debt_id: str, status: DebtStatus | str) -> list[DebtItem]:
        """Move a debt item to a new status and return the refreshed list for its service."""
        status = DebtStatus(status)
        logger.debug("Transitioning debt item", debt_id=debt_id, status=status.value)
        return await self.update(debt_id, {"status": status.value}, parent_id=service_id, partial=True)
