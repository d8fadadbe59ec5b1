"""CLI for the service catalog."""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Annotated, Literal, TypeVar

import structlog
from cyclopts import App, Parameter

from service_catalog.config import get_config, resolve_base_url
from service_catalog.config_commands import config_app
from service_catalog.errors import ApiError
from service_catalog.http import ApiClient
from service_catalog.report_commands import reports_app
from service_catalog.service_commands import services_app, teams_app
from service_catalog.tracking_commands import debt_app, releases_app

logger = structlog.get_logger()

R = TypeVar("R")

app = App(
    help="Service Catalog - services, teams, releases and technical debt",
)

app.command(services_app)
app.command(teams_app)
app.command(releases_app)
app.command(debt_app)
app.command(reports_app)
app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_api_client() -> ApiClient:
    """Build an API client for the configured backend."""
    config = get_config()
    base_url = resolve_base_url(config)
    logger.debug("Using backend", base_url=base_url)
    return ApiClient(base_url)


def run(operation: Callable[[ApiClient], Awaitable[R]]) -> R:
    """Run an async operation against a fresh API client.

    API failures are reported on stderr and turn into exit status 1. The
    message a client recorded for the failure is preferred over the raw one.
    """

    async def _main() -> R:
        async with get_api_client() as api:
            return await operation(api)

    try:
        return asyncio.run(_main())
    except ApiError as e:
        status = f" (HTTP {e.status})" if e.status else ""
        print(f"Error{status}: {e.reported or e.message}", file=sys.stderr)
        raise SystemExit(1) from e


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
