"""OrderHistoryBackend adapter over clientman.models.Order."""

from django.utils.module_loading import import_string

from clientman.protocols.orders import OrderHistoryBackend, OrderRecord


class ModelOrderHistoryBackend:
    """
    Adapter that implements OrderHistoryBackend by querying the Order table.

    Configuration in settings.py:
        CLIENTMAN = {
            "ORDER_HISTORY_BACKEND": "clientman.adapters.orders.ModelOrderHistoryBackend",
        }
    """

    def get_order_records(self, client_id) -> list[OrderRecord]:
        from clientman.models import Order

        rows = Order.objects.filter(client_id=client_id).values_list(
            "total_amount", "created_at", "delivery_date"
        )
        return [
            OrderRecord(
                total_amount=total_amount,
                created_at=created_at,
                delivery_date=delivery_date,
            )
            for total_amount, created_at, delivery_date in rows
        ]

    def has_orders(self, client_id) -> bool:
        from clientman.models import Order

        return Order.objects.filter(client_id=client_id).exists()


def get_order_backend() -> OrderHistoryBackend:
    """Instantiate the configured OrderHistoryBackend."""
    from clientman.conf import clientman_settings

    backend_class = import_string(clientman_settings.ORDER_HISTORY_BACKEND)
    return backend_class()
