# Generated migration for Client and Order

import uuid

import django.db.models.deletion
import django.db.models.functions.text
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                (
                    "client_type",
                    models.CharField(
                        choices=[("individual", "Individual"), ("business", "Business")],
                        default="individual",
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        blank=True, db_index=True, max_length=254, verbose_name="email"
                    ),
                ),
                (
                    "phone",
                    models.CharField(
                        blank=True, db_index=True, max_length=30, verbose_name="phone"
                    ),
                ),
                (
                    "phone_digits",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        editable=False,
                        help_text="Digits of the phone number, for format-insensitive matching.",
                        max_length=30,
                        verbose_name="phone digits",
                    ),
                ),
                (
                    "whatsapp",
                    models.CharField(blank=True, max_length=30, verbose_name="WhatsApp"),
                ),
                (
                    "instagram_handle",
                    models.CharField(blank=True, max_length=100, verbose_name="Instagram"),
                ),
                (
                    "preferred_contact",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("email", "Email"),
                            ("phone", "Phone"),
                            ("whatsapp", "WhatsApp"),
                            ("instagram", "Instagram"),
                        ],
                        max_length=20,
                        verbose_name="preferred contact",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                (
                    "total_orders",
                    models.PositiveIntegerField(default=0, verbose_name="total orders"),
                ),
                (
                    "total_spent",
                    models.CharField(
                        default="0",
                        help_text="Decimal amount as text, two fraction digits.",
                        max_length=20,
                        verbose_name="total spent",
                    ),
                ),
                (
                    "first_order_date",
                    models.DateField(blank=True, null=True, verbose_name="first order"),
                ),
                (
                    "last_order_date",
                    models.DateField(
                        blank=True, db_index=True, null=True, verbose_name="last order"
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated at"),
                ),
            ],
            options={
                "verbose_name": "client",
                "verbose_name_plural": "clients",
                "db_table": "clientman_client",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "order_number",
                    models.CharField(blank=True, max_length=50, verbose_name="order number"),
                ),
                (
                    "customer_name",
                    models.CharField(blank=True, max_length=200, verbose_name="customer name"),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2, max_digits=10, verbose_name="total amount"
                    ),
                ),
                (
                    "currency",
                    models.CharField(default="CHF", max_length=3, verbose_name="currency"),
                ),
                (
                    "channel",
                    models.CharField(
                        choices=[
                            ("website", "Website"),
                            ("instagram", "Instagram"),
                            ("email", "Email"),
                            ("whatsapp", "WhatsApp"),
                            ("phone", "Phone"),
                            ("walk_in", "Walk-in"),
                            ("other", "Other"),
                        ],
                        default="website",
                        max_length=20,
                        verbose_name="channel",
                    ),
                ),
                (
                    "status",
                    models.CharField(default="pending", max_length=20, verbose_name="status"),
                ),
                ("paid", models.BooleanField(default=False, verbose_name="paid")),
                (
                    "delivery_date",
                    models.DateField(blank=True, null=True, verbose_name="delivery date"),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        verbose_name="created at",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated at"),
                ),
                (
                    "client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="clientman.client",
                        verbose_name="client",
                    ),
                ),
            ],
            options={
                "verbose_name": "order",
                "verbose_name_plural": "orders",
                "db_table": "clientman_order",
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="client",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("email"),
                condition=models.Q(("email", ""), _negated=True),
                name="clientman_unique_client_email",
            ),
        ),
        migrations.AddConstraint(
            model_name="client",
            constraint=models.UniqueConstraint(
                condition=models.Q(("phone", ""), _negated=True),
                fields=("phone",),
                name="clientman_unique_client_phone",
            ),
        ),
        migrations.AddIndex(
            model_name="client",
            index=models.Index(
                fields=["total_orders"], name="clientman_client_orders_idx"
            ),
        ),
    ]
