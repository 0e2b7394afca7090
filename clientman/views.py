"""
Admin JSON endpoints for clients.

Payloads use the camelCase keys the admin dashboard consumes. Every view
requires a staff user; authentication itself is the project's concern.
"""

from __future__ import annotations

import json
import logging

from django.contrib.auth.mixins import UserPassesTestMixin
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from clientman.exceptions import ClientmanError
from clientman.models import Client
from clientman.protocols.client import ClientSearchResult
from clientman.services import client as client_service
from clientman.services import stats as stats_service

logger = logging.getLogger("clientman.views")

ERROR_STATUS = {
    "CONTACT_REQUIRED": 400,
    "NAME_REQUIRED": 400,
    "NO_FIELDS": 400,
    "INVALID_CHOICE": 400,
    "CLIENT_NOT_FOUND": 404,
    "DUPLICATE_CONTACT": 409,
}


def client_payload(client: Client) -> dict:
    return {
        "id": str(client.id),
        "name": client.name,
        "email": client.email or None,
        "phone": client.phone or None,
        "whatsapp": client.whatsapp or None,
        "instagramHandle": client.instagram_handle or None,
        "preferredContact": client.preferred_contact or None,
        "firstOrderDate": _iso(client.first_order_date),
        "lastOrderDate": _iso(client.last_order_date),
        "totalOrders": client.total_orders,
        "totalSpent": client.total_spent,
        "notes": client.notes or None,
        "clientType": client.client_type,
        "createdAt": _iso(client.created_at),
        "updatedAt": _iso(client.updated_at),
    }


def search_payload(result: ClientSearchResult) -> dict:
    return {
        "id": result.id,
        "name": result.name,
        "email": result.email,
        "phone": result.phone,
        "instagramHandle": result.instagram_handle,
        "preferredContact": result.preferred_contact,
        "totalOrders": result.total_orders,
        "totalSpent": result.total_spent,
        "lastOrderDate": _iso(result.last_order_date),
    }


def _iso(value):
    return value.isoformat() if value else None


def _error(message: str, status: int) -> JsonResponse:
    return JsonResponse({"success": False, "error": message}, status=status)


def _clientman_error(exc: ClientmanError) -> JsonResponse:
    status = ERROR_STATUS.get(exc.code, 500)
    if status == 500:
        logger.error("Client operation failed: %s", exc)
    return _error(exc.message, status)


def _int_param(request, name: str, default: int | None) -> int | None:
    try:
        return int(request.GET.get(name, ""))
    except ValueError:
        return default


def _json_body(request) -> dict | None:
    try:
        data = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


@method_decorator(csrf_exempt, name="dispatch")
class StaffJsonView(UserPassesTestMixin, View):
    """Base view: staff only, JSON errors."""

    def test_func(self):
        user = self.request.user
        return user.is_authenticated and user.is_staff

    def handle_no_permission(self):
        return _error("Unauthorized", 401)


class ClientListView(StaffJsonView):
    """GET: paginated listing. POST: manual creation."""

    def get(self, request):
        page = client_service.list_clients(
            page=_int_param(request, "page", 1) or 1,
            limit=_int_param(request, "limit", None),
            search=request.GET.get("search", ""),
            sort_by=request.GET.get("sortBy", "last_order_date"),
            sort_order=request.GET.get("sortOrder", "desc"),
            preferred_contact=request.GET.get("preferredContact", ""),
        )
        return JsonResponse(
            {
                "success": True,
                "clients": [client_payload(c) for c in page.items],
                "pagination": {
                    "page": page.page,
                    "limit": page.limit,
                    "total": page.total,
                    "totalPages": page.total_pages,
                },
            }
        )

    def post(self, request):
        data = _json_body(request)
        if data is None:
            return _error("Invalid JSON", 400)

        try:
            client = client_service.create_client(
                name=data.get("name") or "",
                email=data.get("email") or "",
                phone=data.get("phone") or "",
                whatsapp=data.get("whatsapp") or "",
                instagram_handle=data.get("instagram_handle") or "",
                preferred_contact=data.get("preferred_contact") or "",
                notes=data.get("notes") or "",
                client_type=data.get("client_type") or "individual",
            )
        except ClientmanError as exc:
            return _clientman_error(exc)

        return JsonResponse(
            {
                "success": True,
                "message": "Client created successfully",
                "client": client_payload(client),
            },
            status=201,
        )


class ClientSearchView(StaffJsonView):
    """GET ?q=&limit= : autocomplete for the order form."""

    def get(self, request):
        results = client_service.search_clients(
            request.GET.get("q", ""),
            _int_param(request, "limit", None),
        )
        return JsonResponse(
            {"success": True, "clients": [search_payload(r) for r in results]}
        )


class ClientDetailView(StaffJsonView):
    """GET: client and order history. PATCH: update. DELETE: guarded delete."""

    def get(self, request, client_id):
        client = client_service.get_client_by_id(client_id)
        if client is None:
            return _error("Client not found", 404)

        orders = [
            {
                "id": str(order.id),
                "orderNumber": order.order_number or None,
                "totalAmount": str(order.total_amount),
                "deliveryDate": _iso(order.delivery_date),
                "createdAt": _iso(order.created_at),
                "paid": order.paid,
                "channel": order.channel,
            }
            for order in client.orders.order_by("-created_at")
        ]
        return JsonResponse(
            {"success": True, "client": client_payload(client), "orders": orders}
        )

    def patch(self, request, client_id):
        data = _json_body(request)
        if data is None:
            return _error("Invalid JSON", 400)

        fields = {
            key: value
            for key, value in data.items()
            if key in client_service.UPDATABLE_FIELDS
        }
        try:
            client = client_service.update_client(client_id, **fields)
        except ClientmanError as exc:
            return _clientman_error(exc)

        return JsonResponse(
            {
                "success": True,
                "message": "Client updated successfully",
                "client": client_payload(client),
            }
        )

    def delete(self, request, client_id):
        result = client_service.delete_client(client_id)
        if not result.success:
            if result.error and "existing orders" in result.error:
                return _error(result.error, 409)
            if result.error == "Client not found":
                return _error(result.error, 404)
            return _error(result.error or "Failed to delete client", 500)

        return JsonResponse({"success": True, "message": "Client deleted successfully"})


class ClientRecalculateView(StaffJsonView):
    """POST: recompute the client's order statistics."""

    def post(self, request, client_id):
        try:
            stats = stats_service.update_client_stats(client_id)
        except ClientmanError as exc:
            return _clientman_error(exc)

        return JsonResponse(
            {
                "success": True,
                "stats": {
                    "totalOrders": stats.total_orders,
                    "totalSpent": stats.total_spent,
                    "firstOrderDate": _iso(stats.first_order_date),
                    "lastOrderDate": _iso(stats.last_order_date),
                },
            }
        )
