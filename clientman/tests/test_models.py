"""Tests for Clientman models."""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from clientman.models import Client, Order

pytestmark = pytest.mark.django_db


class TestClient:
    def test_defaults(self):
        client = Client.objects.create(name="Mia", email="mia@example.ch")

        assert client.client_type == "individual"
        assert client.total_orders == 0
        assert client.total_spent == "0"
        assert client.total_spent_amount == Decimal("0")
        assert client.first_order_date is None
        assert str(client) == "Mia"

    def test_phone_digits_on_save(self):
        client = Client.objects.create(name="Mia", phone="+41 (79) 123-45-67")
        assert client.phone_digits == "41791234567"

        client.phone = "044 555 66 77"
        client.save(update_fields=["phone"])
        client.refresh_from_db()
        assert client.phone_digits == "0445556677"

    def test_contact_methods(self, anna, bruno):
        assert anna.contact_methods == ["email", "phone", "whatsapp"]
        assert bruno.contact_methods == ["instagram"]

    def test_email_unique_ignoring_case(self, anna):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Client.objects.create(name="Copy", email="Anna@Example.CH")

    def test_phone_unique(self, anna):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Client.objects.create(name="Copy", phone="+41791234567")

    def test_blank_contacts_are_not_unique(self):
        Client.objects.create(name="One", instagram_handle="one")
        Client.objects.create(name="Two", instagram_handle="two")

        assert Client.objects.filter(email="", phone="").count() == 2


class TestOrder:
    def test_protects_client(self, anna, make_order):
        make_order(anna, "15.00")

        with pytest.raises(ProtectedError):
            anna.delete()

    def test_related_orders(self, anna, make_order):
        order = make_order(anna, "15.00", order_number="B-7")

        assert list(anna.orders.all()) == [order]
        assert str(order) == "B-7"
        assert order.currency == "CHF"
