"""Client value types shared by services, views and callers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from clientman.models import Client


@dataclass
class ContactInfo:
    """
    Raw contact details collected by an order or meeting workflow.

    Strings are stripped on construction; blank values become None.
    """

    name: str = ""
    email: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    instagram_handle: str | None = None
    preferred_contact: str | None = None
    notes: str | None = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                value = value.strip()
                if f.name != "name" and not value:
                    value = None
                setattr(self, f.name, value)
        if self.name is None:
            self.name = ""

    @property
    def has_contact_method(self) -> bool:
        return bool(self.email or self.phone or self.instagram_handle)


@dataclass(frozen=True)
class FindOrCreateResult:
    """Result of find_or_create_client()."""

    client: Client
    is_new: bool


@dataclass(frozen=True)
class ClientSearchResult:
    """Autocomplete row."""

    id: str
    name: str
    email: str | None
    phone: str | None
    instagram_handle: str | None
    preferred_contact: str | None
    total_orders: int
    total_spent: str
    last_order_date: date | None

    @classmethod
    def from_client(cls, client: Client) -> ClientSearchResult:
        return cls(
            id=str(client.id),
            name=client.name,
            email=client.email or None,
            phone=client.phone or None,
            instagram_handle=client.instagram_handle or None,
            preferred_contact=client.preferred_contact or None,
            total_orders=client.total_orders or 0,
            total_spent=client.total_spent or "0",
            last_order_date=client.last_order_date,
        )

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.last_order_date:
            data["last_order_date"] = self.last_order_date.isoformat()
        return data


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of delete_client(). Blocked deletions are not exceptions."""

    success: bool
    error: str | None = None


@dataclass(frozen=True)
class ClientPage:
    """One page of the admin client listing."""

    items: list[Client]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit
