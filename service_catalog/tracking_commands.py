"""Release and debt commands for the service catalog CLI."""

from typing import Literal

from cyclopts import App

from service_catalog.http import ApiClient
from service_catalog.models import DebtItem, Release
from service_catalog.resources import DebtClient, ReleasesClient

releases_app = App(name="releases", help="Manage service releases")
debt_app = App(name="debt", help="Manage technical debt items")

DebtTypeName = Literal["code", "documentation", "testing", "architecture", "infrastructure", "security"]
DebtStatusName = Literal["pending", "in_progress", "remediated"]


def format_release(release: Release) -> str:
    version = release.version or "unversioned"
    url = f" {release.url}" if release.url else ""
    return f"{release.release_date or '-'} {version}{url}"


def format_debt(item: DebtItem) -> str:
    status = getattr(item.status, "value", item.status)
    kind = getattr(item.type, "value", item.type)
    status_marker = "○" if status == "remediated" else "●"
    kind_str = f" [{kind}]" if kind else ""
    return f"{status_marker} {item.id}: {item.title}{kind_str} ({status})"


def print_releases(releases: list[Release]) -> None:
    if not releases:
        print("No releases found")
        return
    for release in releases:
        print(format_release(release))


def print_debt(items: list[DebtItem]) -> None:
    if not items:
        print("No debt items found")
        return
    for item in items:
        print(format_debt(item))


@releases_app.command(name="list")
def list_releases(service_id: str) -> None:
    """List releases of a service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Release]:
        return await ReleasesClient(api).list_releases(service_id)

    print_releases(run(operation))


@releases_app.command(name="create")
def create_release(
    service_id: str,
    version: str | None = None,
    url: str | None = None,
    release_date: str | None = None,
) -> None:
    """Record a release. The backend uses the current time when no date is given."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Release]:
        return await ReleasesClient(api).create_release(
            service_id, version=version, url=url, release_date=release_date
        )

    releases = run(operation)
    print(f"Recorded release for service {service_id}")
    print_releases(releases)


@debt_app.command(name="list")
def list_debt(service_id: str) -> None:
    """List debt items of a service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[DebtItem]:
        return await DebtClient(api).list_debt(service_id)

    print_debt(run(operation))


@debt_app.command(name="create")
def create_debt(
    service_id: str,
    title: str,
    type: DebtTypeName | None = None,
    description: str | None = None,
    status: DebtStatusName | None = None,
) -> None:
    """Record a debt item against a service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[DebtItem]:
        return await DebtClient(api).create_debt(
            service_id, title, type=type, description=description, status=status
        )

    items = run(operation)
    print(f"Recorded debt item for service {service_id}")
    print_debt(items)


@debt_app.command(name="status")
def update_debt_status(service_id: str, debt_id: str, status: DebtStatusName) -> None:
    """Move a debt item to a new status."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[DebtItem]:
        return await DebtClient(api).update_debt_status(service_id, debt_id, status)

    items = run(operation)
    print(f"Debt item {debt_id} is now {status}")
    print_debt(items)
