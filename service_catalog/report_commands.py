"""Report commands for the service catalog CLI."""

from datetime import date

from cyclopts import App

from service_catalog.http import ApiClient
from service_catalog.models import Release, RiskReport, Service
from service_catalog.resources import ReportsClient
from service_catalog.service_commands import print_services
from service_catalog.tracking_commands import print_releases

reports_app = App(name="reports", help="Read derived reports")


@reports_app.command(name="risk")
def service_risk(service_id: str) -> None:
    """Show the risk report for a service."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> RiskReport:
        return await ReportsClient(api).get_service_risk(service_id)

    report = run(operation)
    print(f"Risk report for service {service_id}\n")
    print(f"Dependents: {report.dependent_count}")
    print(f"Total debt: {report.total_debt}")
    for debt_type, count in sorted(report.debt_count_by_type.items()):
        print(f"  {debt_type}: {count}")


@reports_app.command(name="team-services")
def team_services(team_id: str) -> None:
    """List the services owned by a team."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Service]:
        return await ReportsClient(api).get_services_by_team(team_id)

    print_services(run(operation))


@reports_app.command(name="releases")
def releases_in_range(start: date, end: date, page: int = 1, page_size: int = 25) -> None:
    """List releases across all services between two dates."""
    from service_catalog.cli import run

    async def operation(api: ApiClient) -> list[Release]:
        return await ReportsClient(api).get_releases_in_range(start, end, page=page, page_size=page_size)

    print_releases(run(operation))
