"""Pytest fixtures for Clientman tests."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from clientman.models import Client, Order


@pytest.fixture
def anna(db):
    """Client reachable by email and phone."""
    return Client.objects.create(
        name="Anna Muster",
        email="anna@example.ch",
        phone="+41791234567",
        whatsapp="+41791234567",
    )


@pytest.fixture
def bruno(db):
    """Client known only by Instagram."""
    return Client.objects.create(
        name="Bruno Keller",
        instagram_handle="bruno.bakes",
        preferred_contact="instagram",
    )


@pytest.fixture
def make_order(db):
    """Factory: make_order(client, "12.50", datetime(...))."""

    def _make(client, amount, created_at=None, **kwargs):
        return Order.objects.create(
            client=client,
            customer_name=client.name if client else "Walk-in",
            total_amount=Decimal(amount),
            created_at=created_at or datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
            **kwargs,
        )

    return _make
