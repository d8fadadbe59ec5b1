"""Service and team commands for the service catalog CLI."""

from cyclopts import App

from service_catalog.http import ApiClient
from service_catalog.models import Service, Team
from service_catalog.resources import ServicesClient, TeamsClient

services_app = App(name="services", help="Manage services")
teams_app = App(name="teams", help="Manage teams")


def format_service(service: Service) -> str:
    tier = f" [tier {service.tier}]" if service.tier is not None else ""
    kind = f" ({service.type})" if service.type else ""
    return f"{service.id}: {service.name}{kind}{tier}"


def format_team(team: Team) -> str:
    return f"{team.id}: {team.name}"


def print_services(services: list[Service]) -> None:
    print(f"Found {len(services)} service(s):\n")
    for service in services:
        print(format_service(service))


@services_app.command(name="list")
def list_services(page: int = 1, page_size: int = 100) -> None:
    """List services."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Service]:
        return await ServicesClient(api).fetch_services(page=page, page_size=page_size)

    print_services(run(operation))


@services_app.command(name="get")
def get_service(service_id: str) -> None:
    """Show a single service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> Service:
        return await ServicesClient(api).get_service(service_id)

    service = run(operation)
    print(f"Service: {service.id}")
    print(f"Name: {service.name}")
    if service.type:
        print(f"Type: {service.type}")
    if service.tier is not None:
        print(f"Tier: {service.tier}")
    if service.url:
        print(f"URL: {service.url}")
    if service.description:
        print(f"Description: {service.description}")


@services_app.command(name="search")
def search_services(query: str) -> None:
    """Search services by name."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Service]:
        return await ServicesClient(api).search_services(query)

    print_services(run(operation))


@services_app.command(name="create")
def create_service(
    name: str,
    type: str | None = None,
    description: str | None = None,
    url: str | None = None,
    tier: int | None = None,
) -> None:
    """Register a new service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Service]:
        return await ServicesClient(api).create_service(
            name=name, type=type, description=description, url=url, tier=tier
        )

    services = run(operation)
    print(f"Created service {name}")
    print_services(services)


@services_app.command(name="update")
def update_service(
    service_id: str,
    name: str | None = None,
    type: str | None = None,
    description: str | None = None,
    url: str | None = None,
    tier: int | None = None,
) -> None:
    """Update a service. Fields not given keep their current value."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Service]:
        client = ServicesClient(api)
        service = await client.get_service(service_id)
        service.id = service.id or service_id
        if name is not None:
            service.name = name
        if type is not None:
            service.type = type
        if description is not None:
            service.description = description
        if url is not None:
            service.url = url
        if tier is not None:
            service.tier = tier
        return await client.update_service(service)

    run(operation)
    print(f"Updated service {service_id}")


@services_app.command(name="delete")
def delete_service(*service_ids: str) -> None:
    """Delete one or more services."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> None:
        client = ServicesClient(api)
        for service_id in service_ids:
            await client.delete_service(service_id)

    run(operation)
    print(f"Deleted {len(service_ids)} service(s)")


@teams_app.command(name="list")
def list_teams(page: int = 1, page_size: int = 100) -> None:
    """List teams."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Team]:
        return await TeamsClient(api).fetch_teams(page=page, page_size=page_size)

    teams = run(operation)
    print(f"Found {len(teams)} team(s):\n")
    for team in teams:
        print(format_team(team))


@teams_app.command(name="get")
def get_team(team_id: str) -> None:
    """Show a single team."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> Team:
        return await TeamsClient(api).get_team(team_id)

    print(format_team(run(operation)))


@teams_app.command(name="create")
def create_team(name: str) -> None:
    """Create a team."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Team]:
        return await TeamsClient(api).create_team(name)

    run(operation)
    print(f"Created team {name}")


@teams_app.command(name="update")
def update_team(team_id: str, name: str) -> None:
    """Rename a team."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Team]:
        return await TeamsClient(api).update_team(team_id, name)

    run(operation)
    print(f"Updated team {team_id}")


@teams_app.command(name="delete")
def delete_team(*team_ids: str) -> None:
    """Delete one or more teams."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> None:
        client = TeamsClient(api)
        for team_id in team_ids:
            await client.delete_team(team_id)

    run(operation)
    print(f"Deleted {len(team_ids)} team(s)")
