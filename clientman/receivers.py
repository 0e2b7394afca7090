"""Order signal receivers that keep client statistics fresh.

Active only with CLIENTMAN["AUTO_RECALCULATE_STATS"] = True. Otherwise the
order workflow calls services.stats.update_client_stats() itself.

An order moved to another client refreshes both the old and the new client.
"""

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from clientman.conf import clientman_settings
from clientman.models import Order

logger = logging.getLogger(__name__)

PREVIOUS_CLIENT_ATTR = "_clientman_previous_client_id"


@receiver(pre_save, sender=Order, dispatch_uid="clientman_order_presave")
def remember_previous_client(sender, instance, **kwargs):
    if not clientman_settings.AUTO_RECALCULATE_STATS or instance._state.adding:
        return

    previous = (
        Order.objects.filter(pk=instance.pk).values_list("client_id", flat=True).first()
    )
    setattr(instance, PREVIOUS_CLIENT_ATTR, previous)


@receiver(post_save, sender=Order, dispatch_uid="clientman_order_saved")
@receiver(post_delete, sender=Order, dispatch_uid="clientman_order_deleted")
def recalculate_client_stats(sender, instance, **kwargs):
    previous = instance.__dict__.pop(PREVIOUS_CLIENT_ATTR, None)
    if not clientman_settings.AUTO_RECALCULATE_STATS:
        return

    from clientman.services.stats import update_client_stats

    for client_id in dict.fromkeys([instance.client_id, previous]):
        if client_id is None:
            continue
        logger.debug("Order %s changed, refreshing client %s", instance.pk, client_id)
        update_client_stats(client_id)
