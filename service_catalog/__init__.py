"""Client for the service catalog REST API."""

from service_catalog.errors import ApiError
from service_catalog.http import ApiClient
from service_catalog.resource import ResourceClient, ResourceState, StatefulClient

__all__ = ["ApiClient", "ApiError", "ResourceClient", "ResourceState", "StatefulClient"]
