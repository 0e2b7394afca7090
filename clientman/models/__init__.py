"""Clientman models."""

from clientman.models.client import Client, ClientType, PreferredContact
from clientman.models.order import Order, OrderChannel

__all__ = [
    "Client",
    "ClientType",
    "PreferredContact",
    "Order",
    "OrderChannel",
]
