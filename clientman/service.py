"""
Clientman public API.

CORE (essential):
    ClientService.find_or_create_client(info, channel) - Match or create
    ClientService.update_client_stats(client_id)        - Recompute aggregates
    ClientService.search_clients(query, limit)          - Autocomplete
    ClientService.get_client_by_id(client_id)           - Fetch one
    ClientService.delete_client(client_id)              - Guarded delete

CONVENIENCE (helpers):
    ClientService.infer_preferred_contact(channel, info)
    ClientService.list_clients(...) / create_client(...) / update_client(...)

Every CORE method has an ``a``-prefixed coroutine twin for ASGI callers.
"""

from asgiref.sync import sync_to_async

from clientman.models import Client
from clientman.protocols.client import (
    ClientPage,
    ClientSearchResult,
    ContactInfo,
    DeletionResult,
    FindOrCreateResult,
)
from clientman.services import client as client_service
from clientman.services import stats as stats_service
from clientman.services.stats import ClientStats
from clientman.utils import infer_preferred_contact


class ClientService:
    """
    Clientman public API.

    Uses @classmethod so projects can subclass and override single steps.
    """

    # ======================================================================
    # CORE API
    # ======================================================================

    @classmethod
    def find_or_create_client(
        cls,
        contact_info: ContactInfo,
        channel: str | None = None,
    ) -> FindOrCreateResult:
        return client_service.find_or_create_client(contact_info, channel)

    @classmethod
    def update_client_stats(cls, client_id) -> ClientStats:
        return stats_service.update_client_stats(client_id)

    @classmethod
    def search_clients(
        cls,
        query: str | None,
        limit: int | None = None,
    ) -> list[ClientSearchResult]:
        return client_service.search_clients(query, limit)

    @classmethod
    def get_client_by_id(cls, client_id) -> Client | None:
        return client_service.get_client_by_id(client_id)

    @classmethod
    def delete_client(cls, client_id) -> DeletionResult:
        return client_service.delete_client(client_id)

    # ======================================================================
    # ASYNC API
    # ======================================================================

    @classmethod
    async def afind_or_create_client(
        cls,
        contact_info: ContactInfo,
        channel: str | None = None,
    ) -> FindOrCreateResult:
        return await sync_to_async(cls.find_or_create_client)(contact_info, channel)

    @classmethod
    async def aupdate_client_stats(cls, client_id) -> ClientStats:
        return await sync_to_async(cls.update_client_stats)(client_id)

    @classmethod
    async def asearch_clients(
        cls,
        query: str | None,
        limit: int | None = None,
    ) -> list[ClientSearchResult]:
        return await sync_to_async(cls.search_clients)(query, limit)

    @classmethod
    async def aget_client_by_id(cls, client_id) -> Client | None:
        return await sync_to_async(cls.get_client_by_id)(client_id)

    @classmethod
    async def adelete_client(cls, client_id) -> DeletionResult:
        return await sync_to_async(cls.delete_client)(client_id)

    # ======================================================================
    # CONVENIENCE API
    # ======================================================================

    @classmethod
    def infer_preferred_contact(
        cls,
        channel: str | None,
        contact_info: ContactInfo,
    ) -> str | None:
        return infer_preferred_contact(channel, contact_info)

    @classmethod
    def list_clients(cls, **params) -> ClientPage:
        return client_service.list_clients(**params)

    @classmethod
    def create_client(cls, name: str, **fields) -> Client:
        return client_service.create_client(name, **fields)

    @classmethod
    def update_client(cls, client_id, **fields) -> Client:
        return client_service.update_client(client_id, **fields)

    @classmethod
    def recalculate_all(cls) -> int:
        return stats_service.recalculate_all()
