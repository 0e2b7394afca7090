"""Client statistics - full recomputation from order history.

Statistics are a cached projection of the order set. They are always rebuilt
from scratch and there is no increment entry point. Repeated or concurrent
calls converge on the same values.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from django.db import DatabaseError, transaction

from clientman.adapters.orders import get_order_backend
from clientman.exceptions import ClientmanError
from clientman.models import Client
from clientman.protocols.orders import OrderHistoryBackend, OrderRecord
from clientman.signals import client_stats_updated
from clientman.utils import parse_uuid

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class ClientStats:
    """Aggregates written onto Client."""

    total_orders: int
    total_spent: str
    first_order_date: date | None
    last_order_date: date | None


EMPTY_STATS = ClientStats(
    total_orders=0,
    total_spent="0",
    first_order_date=None,
    last_order_date=None,
)


def _utc_date(value: datetime) -> date:
    """Calendar date of a timestamp in UTC. Naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def compute_stats(records: list[OrderRecord]) -> ClientStats:
    """Aggregate order records. Pure; empty input gives EMPTY_STATS."""
    if not records:
        return EMPTY_STATS

    total = sum((Decimal(r.total_amount or 0) for r in records), Decimal("0"))
    dates = sorted(_utc_date(r.created_at) for r in records if r.created_at)

    return ClientStats(
        total_orders=len(records),
        total_spent=str(total.quantize(CENT, rounding=ROUND_HALF_UP)),
        first_order_date=dates[0] if dates else None,
        last_order_date=dates[-1] if dates else None,
    )


def update_client_stats(
    client_id,
    backend: OrderHistoryBackend | None = None,
) -> ClientStats:
    """
    Recompute and store a client's order statistics.

    Args:
        client_id: Client primary key
        backend: OrderHistoryBackend (defaults to the configured one)

    Returns:
        The ClientStats written

    Raises:
        ClientmanError: STATS_FETCH_FAILED, STATS_WRITE_FAILED or CLIENT_NOT_FOUND
    """
    pk = parse_uuid(client_id)
    if pk is None:
        raise ClientmanError("CLIENT_NOT_FOUND", client_id=str(client_id))
    backend = backend or get_order_backend()

    try:
        records = backend.get_order_records(pk)
    except DatabaseError as exc:
        raise ClientmanError(
            "STATS_FETCH_FAILED",
            f"Failed to fetch order stats: {exc}",
            client_id=str(client_id),
        ) from exc

    stats = compute_stats(records)

    try:
        with transaction.atomic():
            updated = Client.objects.filter(pk=pk).update(**asdict(stats))
    except DatabaseError as exc:
        raise ClientmanError(
            "STATS_WRITE_FAILED",
            f"Failed to update client stats: {exc}",
            client_id=str(client_id),
        ) from exc

    if not updated:
        raise ClientmanError("CLIENT_NOT_FOUND", client_id=str(client_id))

    logger.info(
        "Client %s stats: %d orders, %s spent",
        client_id,
        stats.total_orders,
        stats.total_spent,
    )
    client_stats_updated.send(sender=Client, client_id=pk, stats=stats)
    return stats


def recalculate_all(backend: OrderHistoryBackend | None = None) -> int:
    """
    Recompute statistics for every client.

    A failing client is logged and skipped; the batch goes on.

    Returns:
        Number of clients refreshed
    """
    backend = backend or get_order_backend()
    count = 0
    for client_id in list(Client.objects.values_list("pk", flat=True)):
        try:
            update_client_stats(client_id, backend=backend)
        except ClientmanError:
            logger.exception("Failed to recalculate stats for client %s", client_id)
            continue
        count += 1
    return count
