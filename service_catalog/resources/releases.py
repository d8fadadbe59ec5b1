"""Releases resource client."""

import re
from datetime import datetime, timezone
from typing import Any

from service_catalog.models import Release
from service_catalog.resource import ResourceClient


def format_release_date(value: datetime | str | None) -> str | None:
    """Render a release date as an ISO-8601 UTC string.

    Naive datetimes are taken to be UTC already.
    """
    if value is None or isinstance(value, str):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class ReleasesClient(ResourceClient[Release]):
    """Releases nested under a service: ``/services/{id}/release``."""

    resource = "releases"
    not_found_code = "RELEASES_NOT_FOUND"
    not_found_pattern = re.compile(r"no\s+releases?|not\s+found", re.IGNORECASE)
    fallback_message = "Failed to load releases"

    def collection_path(self, parent_id: str | None = None) -> str:
        if not parent_id:
            raise ValueError("Releases are listed per service; service id is required")
        return f"/services/{parent_id}/release"

    def parse(self, data: dict[str, Any]) -> Release:
        return Release.from_dict(data)

    async def list_releases(self, service_id: str) -> list[Release]:
        return await self.list_entities(service_id)

    async def create_release(
        self,
        service_id: str,
        version: str | None = None,
        url: str | None = None,
        release_date: datetime | str | None = None,
    ) -> list[Release]:
        """Record a release. The backend stamps the current UTC time when no date is given."""
        payload = Release(url=url, version=version, release_date=format_release_date(release_date)).to_payload()
        return await self.create(payload, parent_id=service_id)
