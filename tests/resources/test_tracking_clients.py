"""Tests for the releases and debt clients."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from service_catalog.errors import ApiError
from service_catalog.http import ApiClient
from service_catalog.models import DebtStatus, DebtType
from service_catalog.resources import DebtClient, ReleasesClient
from service_catalog.resources.releases import format_release_date


@pytest.fixture
def debt(api: ApiClient) -> DebtClient:
    """Create a debt client."""
    return DebtClient(api)


@pytest.fixture
def releases(api: ApiClient) -> ReleasesClient:
    """Create a releases client."""
    return ReleasesClient(api)


@pytest.mark.asyncio
async def test_list_debt_404_is_empty(debt: DebtClient, backend) -> None:
    """Test a service without debt answers with an empty list."""
    backend.add("GET", "/services/svc-1/debt", status=404)

    result = await debt.list_debt("svc-1")

    assert result == []
    assert debt.items == []
    assert debt.error is None
    assert debt.loading is False


@pytest.mark.asyncio
async def test_list_debt_500_sets_error(debt: DebtClient, backend) -> None:
    """Test a server error is recorded and re-raised."""
    backend.add("GET", "/services/svc-1/debt", status=500, json={"message": "internal error"})

    with pytest.raises(ApiError):
        await debt.list_debt("svc-1")

    assert debt.error == "internal error"
    assert debt.loading is False


@pytest.mark.asyncio
async def test_list_debt_parses_items(debt: DebtClient, backend) -> None:
    """Test debt items are parsed with their enums."""
    backend.add(
        "GET",
        "/services/svc-1/debt",
        json=[
            {"id": "d-1", "title": "No tests", "type": "testing", "status": "pending"},
            {"id": "d-2", "title": "Odd", "type": "legacy", "status": "in_progress"},
        ],
    )

    items = await debt.list_debt("svc-1")

    assert items[0].type is DebtType.TESTING
    assert items[0].status is DebtStatus.PENDING
    assert items[1].type == "legacy"
    assert items[1].status is DebtStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_list_debt_network_error(debt: DebtClient, backend) -> None:
    """Test a transport failure is surfaced with its message."""
    backend.fail_with("GET", "/services/svc-1/debt", httpx.ConnectError, "connection refused")

    with pytest.raises(ApiError) as exc_info:
        await debt.list_debt("svc-1")

    assert exc_info.value.status is None
    assert debt.error == "connection refused"


@pytest.mark.asyncio
async def test_create_debt(debt: DebtClient, backend) -> None:
    """Test creating a debt item posts under the service then refreshes."""
    backend.add("POST", "/services/svc-1/debt", status=201, json={"id": "d-9"})
    backend.add("GET", "/services/svc-1/debt", json=[{"id": "d-9", "title": "Flaky CI", "status": "pending"}])

    items = await debt.create_debt("svc-1", "Flaky CI", type="testing", description="retries everywhere")

    body = json.loads(backend.calls("POST")[0].content)
    assert body == {"title": "Flaky CI", "type": "testing", "description": "retries everywhere"}
    assert [i.id for i in items] == ["d-9"]


@pytest.mark.asyncio
async def test_create_debt_rejects_unknown_type(debt: DebtClient, backend) -> None:
    """Test an unknown debt type is rejected before any request."""
    with pytest.raises(ValueError):
        await debt.create_debt("svc-1", "x", type="cosmetic")

    assert backend.requests == []


@pytest.mark.asyncio
async def test_update_debt_status_patches(debt: DebtClient, backend) -> None:
    """Test a status transition PATCHes /debt/{id} and refreshes the service list."""
    backend.add("PATCH", "/debt/d-1", json={"id": "d-1", "status": "remediated"})
    backend.add("GET", "/services/svc-1/debt", json=[{"id": "d-1", "title": "t", "status": "remediated"}])

    items = await debt.update_debt_status("svc-1", "d-1", DebtStatus.REMEDIATED)

    patch = backend.calls("PATCH")[0]
    assert json.loads(patch.content) == {"status": "remediated"}
    assert items[0].status is DebtStatus.REMEDIATED


@pytest.mark.asyncio
async def test_debt_requires_service(debt: DebtClient) -> None:
    """Test debt cannot be listed without a service."""
    with pytest.raises(ValueError, match="service id is required"):
        await debt.list_entities()


@pytest.mark.asyncio
async def test_list_releases_no_releases_code(releases: ReleasesClient, backend) -> None:
    """Test the releases sentinel code is normalized."""
    backend.add("GET", "/services/svc-1/release", status=400, json={"code": "RELEASES_NOT_FOUND"})

    assert await releases.list_releases("svc-1") == []
    assert releases.error is None


@pytest.mark.asyncio
async def test_create_release_without_date(releases: ReleasesClient, backend) -> None:
    """Test the release date is left to the server when omitted."""
    backend.add("POST", "/services/svc-1/release", status=201)
    backend.add(
        "GET",
        "/services/svc-1/release",
        json=[{"id": "r-1", "version": "1.2.0", "release_date": "2025-01-15T10:00:00Z"}],
    )

    result = await releases.create_release("svc-1", version="1.2.0")

    assert json.loads(backend.calls("POST")[0].content) == {"version": "1.2.0"}
    assert result[0].release_date == "2025-01-15T10:00:00Z"


@pytest.mark.asyncio
async def test_create_release_with_datetime(releases: ReleasesClient, backend) -> None:
    """Test datetimes are sent as UTC ISO strings."""
    backend.add("POST", "/services/svc-1/release", status=201)
    backend.add("GET", "/services/svc-1/release", json=[])
    released = datetime(2025, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    await releases.create_release("svc-1", version="2.0.0", url="https://example.com/r/2", release_date=released)

    body = json.loads(backend.calls("POST")[0].content)
    assert body["release_date"] == "2025-01-15T10:00:00Z"
    assert body["url"] == "https://example.com/r/2"


def test_format_release_date() -> None:
    """Test release date formatting."""
    assert format_release_date(None) is None
    assert format_release_date("2025-01-01") == "2025-01-01"
    assert format_release_date(datetime(2025, 1, 1, 8, 30)) == "2025-01-01T08:30:00Z"
