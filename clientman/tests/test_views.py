"""Tests for the admin client endpoints and Django admin."""

import json
import uuid

import pytest
from django.urls import reverse

from clientman.models import Client

pytestmark = pytest.mark.django_db


def patch_json(http, url, data):
    return http.patch(url, data=json.dumps(data), content_type="application/json")


class TestAuthorization:
    def test_anonymous_is_rejected(self, client, anna):
        response = client.get(reverse("clientman:client-list"))

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}

    def test_non_staff_is_rejected(self, client, django_user_model, anna):
        user = django_user_model.objects.create_user("baker", password="pw")
        client.force_login(user)

        response = client.delete(reverse("clientman:client-detail", args=[anna.pk]))

        assert response.status_code == 401
        assert Client.objects.filter(pk=anna.pk).exists()


class TestClientListView:
    def test_list(self, admin_client, anna, bruno):
        response = admin_client.get(
            reverse("clientman:client-list"), {"sortBy": "name", "sortOrder": "asc"}
        )

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["clients"]] == ["Anna Muster", "Bruno Keller"]
        assert data["pagination"] == {"page": 1, "limit": 50, "total": 2, "totalPages": 1}
        assert data["clients"][1]["email"] is None
        assert data["clients"][1]["instagramHandle"] == "bruno.bakes"

    def test_negative_limit_uses_default(self, admin_client, anna, bruno):
        response = admin_client.get(reverse("clientman:client-list"), {"limit": "-5"})

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["limit"] == 50
        assert len(data["clients"]) == 2

    def test_create(self, admin_client):
        response = admin_client.post(
            reverse("clientman:client-list"),
            data=json.dumps({"name": "Lea", "email": "lea@example.ch"}),
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["client"]["email"] == "lea@example.ch"
        assert data["client"]["totalSpent"] == "0"
        assert Client.objects.filter(email="lea@example.ch").exists()

    def test_create_without_contact(self, admin_client):
        response = admin_client.post(
            reverse("clientman:client-list"),
            data=json.dumps({"name": "Lea"}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "contact method" in response.json()["error"]

    def test_create_duplicate(self, admin_client, anna):
        response = admin_client.post(
            reverse("clientman:client-list"),
            data=json.dumps({"name": "Anna", "phone": "+41791234567"}),
            content_type="application/json",
        )
        assert response.status_code == 409

    def test_invalid_json(self, admin_client):
        response = admin_client.post(
            reverse("clientman:client-list"),
            data="{not json",
            content_type="application/json",
        )
        assert response.status_code == 400


class TestClientSearchView:
    def test_search(self, admin_client, anna, bruno):
        response = admin_client.get(reverse("clientman:client-search"), {"q": "bruno"})

        assert response.status_code == 200
        clients = response.json()["clients"]
        assert len(clients) == 1
        assert clients[0] == {
            "id": str(bruno.pk),
            "name": "Bruno Keller",
            "email": None,
            "phone": None,
            "instagramHandle": "bruno.bakes",
            "preferredContact": "instagram",
            "totalOrders": 0,
            "totalSpent": "0",
            "lastOrderDate": None,
        }

    def test_empty_query_returns_recent(self, admin_client, anna, bruno):
        response = admin_client.get(reverse("clientman:client-search"), {"limit": "1"})
        assert len(response.json()["clients"]) == 1

    def test_negative_limit_uses_default(self, admin_client, anna, bruno):
        response = admin_client.get(
            reverse("clientman:client-search"), {"q": "an", "limit": "-1"}
        )

        assert response.status_code == 200
        assert len(response.json()["clients"]) == 1


class TestClientDetailView:
    def test_get_with_orders(self, admin_client, anna, make_order):
        make_order(anna, "12.50", order_number="B-1001")

        response = admin_client.get(reverse("clientman:client-detail", args=[anna.pk]))

        assert response.status_code == 200
        data = response.json()
        assert data["client"]["id"] == str(anna.pk)
        assert data["orders"][0]["orderNumber"] == "B-1001"
        assert data["orders"][0]["totalAmount"] == "12.50"

    def test_get_unknown(self, admin_client):
        response = admin_client.get(reverse("clientman:client-detail", args=[uuid.uuid4()]))
        assert response.status_code == 404

    def test_patch(self, admin_client, anna):
        response = patch_json(
            admin_client,
            reverse("clientman:client-detail", args=[anna.pk]),
            {"notes": "Prefers rye", "total_orders": 50},
        )

        assert response.status_code == 200
        assert response.json()["client"]["notes"] == "Prefers rye"
        anna.refresh_from_db()
        assert anna.total_orders == 0

    def test_patch_without_fields(self, admin_client, anna):
        response = patch_json(
            admin_client,
            reverse("clientman:client-detail", args=[anna.pk]),
            {"total_spent": "1"},
        )
        assert response.status_code == 400

    def test_patch_unknown(self, admin_client):
        response = patch_json(
            admin_client,
            reverse("clientman:client-detail", args=[uuid.uuid4()]),
            {"name": "Ghost"},
        )
        assert response.status_code == 404

    def test_delete(self, admin_client, anna):
        response = admin_client.delete(reverse("clientman:client-detail", args=[anna.pk]))

        assert response.status_code == 200
        assert not Client.objects.filter(pk=anna.pk).exists()

    def test_delete_with_orders(self, admin_client, anna, make_order):
        make_order(anna, "3.00")

        response = admin_client.delete(reverse("clientman:client-detail", args=[anna.pk]))

        assert response.status_code == 409
        assert response.json()["error"] == "Cannot delete client with existing orders"

    def test_delete_unknown(self, admin_client):
        response = admin_client.delete(reverse("clientman:client-detail", args=[uuid.uuid4()]))
        assert response.status_code == 404


class TestClientRecalculateView:
    def test_recalculate(self, admin_client, anna, make_order):
        make_order(anna, "7.25")

        response = admin_client.post(reverse("clientman:client-recalculate", args=[anna.pk]))

        assert response.status_code == 200
        assert response.json()["stats"] == {
            "totalOrders": 1,
            "totalSpent": "7.25",
            "firstOrderDate": "2026-03-01",
            "lastOrderDate": "2026-03-01",
        }

    def test_recalculate_unknown(self, admin_client):
        response = admin_client.post(
            reverse("clientman:client-recalculate", args=[uuid.uuid4()])
        )
        assert response.status_code == 404


class TestDjangoAdmin:
    def test_changelist(self, admin_client, anna, make_order):
        make_order(anna, "10.00")

        assert admin_client.get(reverse("admin:clientman_client_changelist")).status_code == 200
        assert admin_client.get(reverse("admin:clientman_order_changelist")).status_code == 200

    def test_change_form(self, admin_client, anna):
        url = reverse("admin:clientman_client_change", args=[anna.pk])
        assert admin_client.get(url).status_code == 200

    def test_recalculate_action(self, admin_client, anna, make_order):
        make_order(anna, "10.00")

        response = admin_client.post(
            reverse("admin:clientman_client_changelist"),
            {"action": "recalculate_stats", "_selected_action": [str(anna.pk)]},
        )

        assert response.status_code == 302
        anna.refresh_from_db()
        assert anna.total_orders == 1
        assert anna.total_spent == "10.00"
