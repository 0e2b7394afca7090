"""Client model.

Data architecture:
    Client.email / phone / whatsapp / instagram_handle
        Contact channels. Empty string means "not known yet". Matching uses
        email (case-insensitive) or phone; the other two are only enriched.

    Client.total_orders / total_spent / first_order_date / last_order_date
        Cached projection of the client's Order history. Never edited by hand;
        rewritten as a whole by services.stats.update_client_stats().
"""

import uuid
from decimal import Decimal

from django.db import models
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _


class PreferredContact(models.TextChoices):
    EMAIL = "email", _("Email")
    PHONE = "phone", _("Phone")
    WHATSAPP = "whatsapp", _("WhatsApp")
    INSTAGRAM = "instagram", _("Instagram")


class ClientType(models.TextChoices):
    INDIVIDUAL = "individual", _("Individual")
    BUSINESS = "business", _("Business")


class Client(models.Model):
    """
    Deduplicated bakery client.

    At least one of email, phone or instagram_handle is required at creation
    (enforced by Gates.contact_presence in the services, not by the model).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(_("name"), max_length=200)
    client_type = models.CharField(
        _("type"),
        max_length=20,
        choices=ClientType.choices,
        default=ClientType.INDIVIDUAL,
    )

    # Contact channels
    email = models.EmailField(_("email"), blank=True, db_index=True)
    phone = models.CharField(_("phone"), max_length=30, blank=True, db_index=True)
    phone_digits = models.CharField(
        _("phone digits"),
        max_length=30,
        blank=True,
        editable=False,
        db_index=True,
        help_text=_("Digits of the phone number, for format-insensitive matching."),
    )
    whatsapp = models.CharField(_("WhatsApp"), max_length=30, blank=True)
    instagram_handle = models.CharField(_("Instagram"), max_length=100, blank=True)
    preferred_contact = models.CharField(
        _("preferred contact"),
        max_length=20,
        choices=PreferredContact.choices,
        blank=True,
    )

    # Internal notes (not visible to client)
    notes = models.TextField(_("notes"), blank=True)

    # Order statistics (derived)
    total_orders = models.PositiveIntegerField(_("total orders"), default=0)
    total_spent = models.CharField(
        _("total spent"),
        max_length=20,
        default="0",
        help_text=_("Decimal amount as text, two fraction digits."),
    )
    first_order_date = models.DateField(_("first order"), null=True, blank=True)
    last_order_date = models.DateField(
        _("last order"), null=True, blank=True, db_index=True
    )

    # Audit
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "clientman_client"
        verbose_name = _("client")
        verbose_name_plural = _("clients")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                condition=~models.Q(email=""),
                name="clientman_unique_client_email",
            ),
            models.UniqueConstraint(
                fields=["phone"],
                condition=~models.Q(phone=""),
                name="clientman_unique_client_phone",
            ),
        ]
        indexes = [
            models.Index(fields=["total_orders"], name="clientman_client_orders_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def total_spent_amount(self) -> Decimal:
        return Decimal(self.total_spent or "0")

    @property
    def contact_methods(self) -> list[str]:
        """Contact channels that hold a value."""
        return [
            method
            for method, value in (
                (PreferredContact.EMAIL, self.email),
                (PreferredContact.PHONE, self.phone),
                (PreferredContact.WHATSAPP, self.whatsapp),
                (PreferredContact.INSTAGRAM, self.instagram_handle),
            )
            if value
        ]

    def save(self, *args, **kwargs):
        from clientman.utils import phone_digits

        self.phone_digits = phone_digits(self.phone)

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "phone" in update_fields:
            kwargs["update_fields"] = {*update_fields, "phone_digits"}

        super().save(*args, **kwargs)
