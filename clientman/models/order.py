"""Order model - the bakery order, as far as client statistics need it."""

import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class OrderChannel(models.TextChoices):
    WEBSITE = "website", _("Website")
    INSTAGRAM = "instagram", _("Instagram")
    EMAIL = "email", _("Email")
    WHATSAPP = "whatsapp", _("WhatsApp")
    PHONE = "phone", _("Phone")
    WALK_IN = "walk_in", _("Walk-in")
    OTHER = "other", _("Other")


class Order(models.Model):
    """
    Order placed by a client.

    Sole source for Client statistics. PROTECT keeps a client with orders
    from being deleted underneath them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(
        "clientman.Client",
        on_delete=models.PROTECT,
        related_name="orders",
        null=True,
        blank=True,
        verbose_name=_("client"),
    )

    order_number = models.CharField(_("order number"), max_length=50, blank=True)
    customer_name = models.CharField(_("customer name"), max_length=200, blank=True)

    total_amount = models.DecimalField(_("total amount"), max_digits=10, decimal_places=2)
    currency = models.CharField(_("currency"), max_length=3, default="CHF")

    channel = models.CharField(
        _("channel"),
        max_length=20,
        choices=OrderChannel.choices,
        default=OrderChannel.WEBSITE,
    )
    status = models.CharField(_("status"), max_length=20, default="pending")
    paid = models.BooleanField(_("paid"), default=False)
    delivery_date = models.DateField(_("delivery date"), null=True, blank=True)

    created_at = models.DateTimeField(_("created at"), default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "clientman_order"
        verbose_name = _("order")
        verbose_name_plural = _("orders")
        ordering = ["-created_at"]

    def __str__(self):
        return self.order_number or str(self.id)
