"""Per-resource API clients."""

from service_catalog.resources.debt import DebtClient
from service_catalog.resources.releases import ReleasesClient
from service_catalog.resources.reports import ReportsClient
from service_catalog.resources.services import ServicesClient
from service_catalog.resources.teams import TeamsClient

__all__ = ["DebtClient", "ReleasesClient", "ReportsClient", "ServicesClient", "TeamsClient"]
