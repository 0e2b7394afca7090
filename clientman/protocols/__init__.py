"""Clientman protocols."""

from clientman.protocols.client import (
    ClientPage,
    ClientSearchResult,
    ContactInfo,
    DeletionResult,
    FindOrCreateResult,
)
from clientman.protocols.orders import (
    OrderHistoryBackend,
    OrderRecord,
)

__all__ = [
    # Client
    "ClientPage",
    "ClientSearchResult",
    "ContactInfo",
    "DeletionResult",
    "FindOrCreateResult",
    # Orders
    "OrderHistoryBackend",
    "OrderRecord",
]
