"""Services resource client."""

import re
from typing import Any

from service_catalog.models import Service
from service_catalog.resource import ResourceClient


class ServicesClient(ResourceClient[Service]):
    """CRUD and search over ``/services``."""

    resource = "services"
    not_found_code = "SERVICES_NOT_FOUND"
    not_found_pattern = re.compile(r"no\s+services?|not\s+found", re.IGNORECASE)
    fallback_message = "Failed to load services"
    list_params = {"page": 1, "pageSize": 100}

    def collection_path(self, parent_id: str | None = None) -> str:
        return "/services"

    def parse(self, data: dict[str, Any]) -> Service:
        return Service.from_dict(data)

    @property
    def services(self) -> list[Service]:
        return self.state.items

    async def fetch_services(self, page: int = 1, page_size: int = 100) -> list[Service]:
        return await self.list_entities(params={"page": page, "pageSize": page_size})

    async def get_service(self, service_id: str) -> Service:
        return await self.get(service_id)

    async def search_services(self, query: str) -> list[Service]:
        return await self.search(query)

    async def create_service(
        self,
        name: str,
        type: str | None = None,
        description: str | None = None,
        url: str | None = None,
        tier: int | None = None,
    ) -> list[Service]:
        """Create a service and return the refreshed list."""
        payload = Service(id="", name=name, type=type, description=description, url=url, tier=tier).to_payload()
        return await self.create(payload)

    async def update_service(self, service: Service) -> list[Service]:
        """Replace a service and return the refreshed list."""
        if not service.id:
            raise ValueError("Service id is required for update")
        return await self.update(service.id, service.to_payload())

    async def delete_service(self, service_id: str) -> list[Service]:
        return await self.delete(service_id)
