"""Generic REST resource client with not-found-is-empty list semantics."""

import re
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import structlog

from service_catalog.errors import ApiError
from service_catalog.http import ApiClient

logger = structlog.get_logger()

T = TypeVar("T")

EMPTY_STATUSES = frozenset({404, 204})


@dataclass
class ResourceState(Generic[T]):
    """Per-client state: the last listed items, the in-flight flag and the last error."""

    items: list[T] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


class StatefulClient(Generic[T]):
    """Owns the loading/error state shared by every API client."""

    resource: str = "items"
    fallback_message: str = "Request failed"

    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.state: ResourceState[T] = ResourceState()

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error

    @asynccontextmanager
    async def tracking(self) -> AsyncIterator[ResourceState[T]]:
        """Mark the client as loading for the duration of the block.

        Clears the error on entry. Loading is reset on every exit path.
        """
        self.state.loading = True
        self.state.error = None
        try:
            yield self.state
        finally:
            self.state.loading = False

    def fail(self, error: ApiError, fallback: str | None = None, message: str | None = None) -> None:
        """Record a human-readable error message for a failed call.

        An explicit ``message`` wins over the error's own message, which wins
        over the fallback.
        """
        self.state.error = message or error.message or fallback or self.fallback_message
        error.reported = self.state.error
        logger.error("Request failed", resource=self.resource, status=error.status, error=self.state.error)


class ResourceClient(StatefulClient[T], ABC):
    """Base class for the per-resource API clients.

    Subclasses describe where the collection lives and how to parse an entity;
    this class supplies list/get/create/update/delete/search on top of that.

    Every mutation is followed by a full list refresh. The local items are
    never patched in place, so after a mutation they equal whatever the
    refresh returned.
    """

    not_found_code: str | None = None
    not_found_pattern: re.Pattern[str] = re.compile(r"not\s+found", re.IGNORECASE)
    list_params: dict[str, Any] | None = None

    def __init__(self, api: ApiClient) -> None:
        super().__init__(api)
        self.last_params: dict[str, Any] | None = None

    @abstractmethod
    def collection_path(self, parent_id: str | None = None) -> str:
        """Path of the collection endpoint."""
        pass

    @abstractmethod
    def parse(self, data: dict[str, Any]) -> T:
        """Convert a JSON object into an entity."""
        pass

    def item_path(self, entity_id: str, parent_id: str | None = None) -> str:
        """Path of a single entity."""
        return f"{self.collection_path(parent_id)}/{entity_id}"

    @property
    def items(self) -> list[T]:
        return self.state.items

    def is_empty_result(self, error: ApiError) -> bool:
        """Whether a list failure actually means "there is nothing here"."""
        if error.status in EMPTY_STATUSES:
            return True
        if self.not_found_code is not None and error.code == self.not_found_code:
            return True
        return bool(error.message) and self.not_found_pattern.search(error.message) is not None

    def _parse_list(self, data: Any) -> list[T]:
        if not isinstance(data, list):
            return []
        return [self.parse(item) for item in data if isinstance(item, dict)]

    async def list_entities(self, parent_id: str | None = None, params: dict[str, Any] | None = None) -> list[T]:
        """Fetch the collection and replace the local items with it.

        Not-found style failures yield an empty list instead of an error.
        Without explicit ``params`` the params of the previous list are reused,
        so a refresh after a mutation stays on the same page.

        Raises:
            ApiError: For any other failure, after recording it in ``error``
        """
        path = self.collection_path(parent_id)
        if params is None:
            params = self.last_params if self.last_params is not None else self.list_params
        self.last_params = params
        logger.info("Listing resources", resource=self.resource, path=path, params=params)
        async with self.tracking() as state:
            try:
                data = await self.api.get(path, params=params)
            except ApiError as e:
                if self.is_empty_result(e):
                    logger.warning(
                        "Treating failure as empty result", resource=self.resource, status=e.status, code=e.code
                    )
                    state.items = []
                    state.error = None
                    return []
                self.fail(e)
                raise
            state.items = self._parse_list(data)
            logger.info("Listed resources", resource=self.resource, count=len(state.items))
            return state.items

    async def get(self, entity_id: str, parent_id: str | None = None) -> T:
        """Fetch a single entity. Failures propagate unmodified.

        Raises:
            ApiError: When the request fails, or the response carries no object
        """
        logger.info("Reading resource", resource=self.resource, entity_id=entity_id)
        path = self.item_path(entity_id, parent_id)
        data = await self.api.get(path)
        if not isinstance(data, dict) or not data:
            logger.error("Empty response for resource", resource=self.resource, entity_id=entity_id)
            raise ApiError(f"No {self.resource} returned for {entity_id}", code="EMPTY_RESPONSE", payload=data)
        return self.parse(data)

    async def _mutate(self, method: str, path: str, payload: dict[str, Any] | None = None) -> None:
        """Send a mutation under the loading/error tracking of this client."""
        async with self.tracking():
            try:
                await self.api.request(method, path, json=payload)
            except ApiError as e:
                self.fail(e, f"Failed to save {self.resource}")
                raise

    async def create(self, payload: dict[str, Any], parent_id: str | None = None) -> list[T]:
        """Create an entity, then refresh the list."""
        logger.info("Creating resource", resource=self.resource, parent_id=parent_id)
        await self._mutate("POST", self.collection_path(parent_id), payload)
        return await self.list_entities(parent_id)

    async def update(
        self,
        entity_id: str,
        payload: dict[str, Any],
        parent_id: str | None = None,
        partial: bool = False,
    ) -> list[T]:
        """Replace (PUT) or patch (PATCH) an entity, then refresh the list."""
        logger.info("Updating resource", resource=self.resource, entity_id=entity_id, partial=partial)
        await self._mutate("PATCH" if partial else "PUT", self.item_path(entity_id, parent_id), payload)
        return await self.list_entities(parent_id)

    async def delete(self, entity_id: str, parent_id: str | None = None) -> list[T]:
        """Delete an entity, then refresh the list."""
        logger.info("Deleting resource", resource=self.resource, entity_id=entity_id)
        await self._mutate("DELETE", self.item_path(entity_id, parent_id))
        return await self.list_entities(parent_id)

    async def search(self, query: str, parent_id: str | None = None) -> list[T]:
        """Search the collection. The local items are left untouched."""
        logger.info("Searching resources", resource=self.resource, query=query)
        async with self.tracking():
            try:
                data = await self.api.get(f"{self.collection_path(parent_id)}/search", params={"query": query})
            except ApiError as e:
                self.fail(e)
                raise
            results = self._parse_list(data)
            logger.info("Search completed", resource=self.resource, count=len(results))
            return results
