"""Teams resource client."""

import re
from typing import Any

from service_catalog.models import Team
from service_catalog.resource import ResourceClient


class TeamsClient(ResourceClient[Team]):
    """CRUD over ``/teams``."""

    resource = "teams"
    not_found_code = "TEAMS_NOT_FOUND"
    not_found_pattern = re.compile(r"no\s+teams?|not\s+found", re.IGNORECASE)
    fallback_message = "Failed to load teams"
    list_params = {"page": 1, "pageSize": 100}

    def collection_path(self, parent_id: str | None = None) -> str:
        return "/teams"

    def parse(self, data: dict[str, Any]) -> Team:
        return Team.from_dict(data)

    @property
    def teams(self) -> list[Team]:
        return self.state.items

    async def fetch_teams(self, page: int = 1, page_size: int = 100) -> list[Team]:
        return await self.list_entities(params={"page": page, "pageSize": page_size})

    async def get_team(self, team_id: str) -> Team:
        return await self.get(team_id)

    async def create_team(self, name: str) -> list[Team]:
        return await self.create({"name": name})

    async def update_team(self, team_id: str, name: str) -> list[Team]:
        return await self.update(team_id, {"id": team_id, "name": name})

    async def delete_team(self, team_id: str) -> list[Team]:
        return await self.delete(team_id)
