"""Order history protocol for client statistics."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class OrderRecord:
    """The parts of an order that client statistics are computed from."""

    total_amount: Decimal
    created_at: datetime
    delivery_date: date | None = None


@runtime_checkable
class OrderHistoryBackend(Protocol):
    """
    Protocol for reading a client's order history.

    Implemented by adapters/orders.py.

    Configuration in settings.py:
        CLIENTMAN = {
            "ORDER_HISTORY_BACKEND": "clientman.adapters.orders.ModelOrderHistoryBackend",
        }
    """

    def get_order_records(self, client_id) -> list[OrderRecord]:
        """
        Return every order of the client.

        Args:
            client_id: Client primary key

        Returns:
            List of OrderRecord, in no particular order
        """
        ...

    def has_orders(self, client_id) -> bool:
        """Return True if the client owns at least one order."""
        ...
