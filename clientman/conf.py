"""
Clientman configuration.

Usage in settings.py:
    CLIENTMAN = {
        "LOOKUP_FAIL_OPEN": True,
        "PHONE_MATCH": "exact",
        "SEARCH_DEFAULT_LIMIT": 10,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class ClientmanSettings:
    """Clientman configuration settings."""

    # Treat a failed match lookup as "no match" and go on to create
    LOOKUP_FAIL_OPEN: bool = True

    # "exact" compares the stored phone verbatim, "digits" compares digits only
    PHONE_MATCH: str = "exact"

    # Autocomplete
    SEARCH_MIN_QUERY_LENGTH: int = 2
    SEARCH_DEFAULT_LIMIT: int = 10

    # Admin listing
    LIST_PAGE_SIZE: int = 50

    # Upper bound for any requested search or page size
    MAX_PAGE_SIZE: int = 200

    # Order history backend (source of client statistics)
    ORDER_HISTORY_BACKEND: str = "clientman.adapters.orders.ModelOrderHistoryBackend"

    # Recompute statistics when an Order is saved or deleted
    AUTO_RECALCULATE_STATS: bool = False


def get_clientman_settings() -> ClientmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "CLIENTMAN", {})
    return ClientmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_clientman_settings(), name)


clientman_settings = _LazySettings()
