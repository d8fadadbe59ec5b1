"""Data models for the service catalog API."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DebtType(str, Enum):
    """Kinds of technical debt."""

    CODE = "code"
    DOCUMENTATION = "documentation"
    TESTING = "testing"
    ARCHITECTURE = "architecture"
    INFRASTRUCTURE = "infrastructure"
    SECURITY = "security"


class DebtStatus(str, Enum):
    """Remediation state of a debt item."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REMEDIATED = "remediated"


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    """Map a raw value onto an enum member, keeping unknown values as-is."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop None values and unwrap enums for a JSON body."""
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items() if v is not None}


@dataclass
class Service:
    """A deployable service registered in the catalog."""

    id: str
    name: str
    type: str | None = None
    description: str | None = None
    url: str | None = None
    tier: int | None = None
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Service":
        tier = data.get("tier")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            type=data.get("type"),
            description=data.get("description"),
            url=data.get("url"),
            tier=int(tier) if tier is not None else None,
            created=data.get("created"),
            updated=data.get("updated"),
        )

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id or None,
                "name": self.name,
                "type": self.type,
                "description": self.description,
                "url": self.url,
                "tier": self.tier,
            }
        )


@dataclass
class Team:
    """A team owning services."""

    id: str
    name: str
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            created=data.get("created"),
            updated=data.get("updated"),
        )

    def to_payload(self) -> dict[str, Any]:
        return _compact({"id": self.id or None, "name": self.name})


@dataclass
class Release:
    """A release of a service.

    ``release_date`` is an ISO-8601 string in UTC. When omitted on create the
    backend fills in the current time.
    """

    id: str | None = None
    url: str | None = None
    version: str | None = None
    release_date: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Release":
        release_id = data.get("id")
        return cls(
            id=str(release_id) if release_id is not None else None,
            url=data.get("url"),
            version=data.get("version"),
            release_date=data.get("release_date"),
        )

    def to_payload(self) -> dict[str, Any]:
        return _compact({"url": self.url, "version": self.version, "release_date": self.release_date})


@dataclass
class DebtItem:
    """A technical debt item recorded against a service."""

    id: str
    title: str
    status: DebtStatus | str = DebtStatus.PENDING
    type: DebtType | str | None = None
    description: str | None = None
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DebtItem":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            status=_coerce_enum(DebtStatus, data.get("status", DebtStatus.PENDING)),
            type=_coerce_enum(DebtType, data.get("type")),
            description=data.get("description"),
            created=data.get("created"),
            updated=data.get("updated"),
        )

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "title": self.title,
                "type": self.type,
                "description": self.description,
                "status": self.status,
            }
        )


@dataclass
class RiskReport:
    """Derived, read-only risk summary for a service."""

    debt_count_by_type: dict[str, int] = field(default_factory=dict)
    dependent_count: int = 0
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskReport":
        counts = data.get("debtCountByType", data.get("debt_count_by_type")) or {}
        dependents = data.get("dependentCount", data.get("dependent_count")) or 0
        return cls(
            debt_count_by_type={str(k): int(v) for k, v in counts.items()},
            dependent_count=int(dependents),
            raw=dict(data),
        )

    @property
    def total_debt(self) -> int:
        return sum(self.debt_count_by_type.values())
