"""Clientman admin."""

from django.contrib import admin, messages
from django.utils.html import format_html

from clientman.exceptions import ClientmanError
from clientman.models import Client, Order
from clientman.services.stats import update_client_stats


# ===========================================
# Inline Classes (must be defined before ClientAdmin)
# ===========================================


class OrderInline(admin.TabularInline):
    model = Order
    extra = 0
    fields = ["order_number", "total_amount", "channel", "paid", "delivery_date", "created_at"]
    readonly_fields = fields
    ordering = ["-created_at"]
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


# ===========================================
# Client Admin
# ===========================================


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "email",
        "phone",
        "preferred_contact",
        "total_orders",
        "formatted_total_spent",
        "last_order_date",
    ]
    list_filter = ["preferred_contact", "client_type"]
    search_fields = ["name", "email", "phone", "instagram_handle"]
    readonly_fields = [
        "id",
        "total_orders",
        "total_spent",
        "first_order_date",
        "last_order_date",
        "created_at",
        "updated_at",
    ]
    inlines = [OrderInline]
    actions = ["recalculate_stats"]

    fieldsets = [
        ("Identification", {"fields": ["id", "name", "client_type"]}),
        (
            "Contact",
            {"fields": ["email", "phone", "whatsapp", "instagram_handle", "preferred_contact"]},
        ),
        ("Notes", {"fields": ["notes"]}),
        (
            "Statistics",
            {
                "fields": [
                    "total_orders",
                    "total_spent",
                    "first_order_date",
                    "last_order_date",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"], "classes": ["collapse"]}),
    ]

    def formatted_total_spent(self, obj):
        return f"CHF {obj.total_spent_amount:,.2f}"

    formatted_total_spent.short_description = "Total Spent"

    @admin.action(description="Recalculate order statistics")
    def recalculate_stats(self, request, queryset):
        done = 0
        for client in queryset:
            try:
                update_client_stats(client.pk)
            except ClientmanError as exc:
                self.message_user(request, f"{client}: {exc.message}", messages.ERROR)
                continue
            done += 1
        self.message_user(request, f"Recalculated statistics for {done} client(s).")


# ===========================================
# Order Admin
# ===========================================


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = [
        "__str__",
        "client_link",
        "total_amount",
        "channel",
        "paid",
        "delivery_date",
        "created_at",
    ]
    list_filter = ["channel", "paid", "status"]
    search_fields = ["order_number", "customer_name", "client__name", "client__email"]
    raw_id_fields = ["client"]
    date_hierarchy = "created_at"

    def client_link(self, obj):
        if not obj.client_id:
            return "-"
        from django.urls import reverse

        url = reverse("admin:clientman_client_change", args=[obj.client_id])
        return format_html('<a href="{}">{}</a>', url, obj.client)

    client_link.short_description = "Client"
