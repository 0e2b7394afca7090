"""Client service - identity resolution, search, admin CRUD.

Matching policy:
    A client is "the same" if the email matches case-insensitively, or
    failing that, if the phone matches. Phone comparison is verbatim unless
    CLIENTMAN["PHONE_MATCH"] = "digits".

Failure policy:
    lookup error         -> no match (LOOKUP_FAIL_OPEN) or LOOKUP_FAILED
    enrichment error     -> logged, unpatched client returned
    creation error       -> CREATE_FAILED raised
    deletion blocked     -> DeletionResult(success=False)
"""

import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import DecimalField, F, ProtectedError, Q
from django.db.models.functions import Cast
from django.utils import timezone

from clientman.conf import clientman_settings
from clientman.exceptions import ClientmanError
from clientman.gates import GateError, Gates
from clientman.models import Client, ClientType, PreferredContact
from clientman.protocols.client import (
    ClientPage,
    ClientSearchResult,
    ContactInfo,
    DeletionResult,
    FindOrCreateResult,
)
from clientman.signals import client_created, client_updated
from clientman.utils import (
    diff_contact_fields,
    infer_preferred_contact,
    parse_uuid,
    phone_digits,
)

logger = logging.getLogger(__name__)


def get_client_by_id(client_id) -> Client | None:
    """Get client by primary key. Unknown or malformed ids give None."""
    pk = parse_uuid(client_id)
    if pk is None:
        return None
    try:
        return Client.objects.get(pk=pk)
    except Client.DoesNotExist:
        return None


# ======================================================================
# Matching
# ======================================================================


def _lookup(field: str, fetch) -> Client | None:
    """Run a match query, applying the fail-open policy to database errors."""
    try:
        with transaction.atomic():
            return fetch()
    except DatabaseError as exc:
        if not clientman_settings.LOOKUP_FAIL_OPEN:
            raise ClientmanError("LOOKUP_FAILED", field=field) from exc
        logger.warning("Client lookup by %s failed, treating as no match: %s", field, exc)
        return None


def find_match(info: ContactInfo) -> Client | None:
    """Existing client with the same email, else the same phone."""
    if info.email:
        client = _lookup(
            "email", Client.objects.filter(email__iexact=info.email).first
        )
        if client:
            return client

    if info.phone:
        if clientman_settings.PHONE_MATCH == "digits":
            digits = phone_digits(info.phone)
            if not digits:
                return None
            qs = Client.objects.filter(phone_digits=digits)
        else:
            qs = Client.objects.filter(phone=info.phone)
        return _lookup("phone", qs.first)

    return None


def _write_fields(client_id, values: dict) -> int:
    values = dict(values)
    if "phone" in values:
        values["phone_digits"] = phone_digits(values["phone"])
    return Client.objects.filter(pk=client_id).update(updated_at=timezone.now(), **values)


def _enrich(existing: Client, info: ContactInfo, channel: str | None) -> FindOrCreateResult:
    patch = diff_contact_fields(existing, info)

    if not existing.preferred_contact and channel:
        inferred = infer_preferred_contact(channel, info)
        if inferred:
            patch["preferred_contact"] = inferred

    if not patch:
        return FindOrCreateResult(client=existing, is_new=False)

    try:
        with transaction.atomic():
            _write_fields(existing.pk, patch)
    except DatabaseError:
        logger.exception("Failed to enrich client %s with %s", existing.pk, sorted(patch))
        return FindOrCreateResult(client=existing, is_new=False)

    changes = {
        key: {"old": getattr(existing, key), "new": value} for key, value in patch.items()
    }
    for key, value in patch.items():
        setattr(existing, key, value)
    existing.phone_digits = phone_digits(existing.phone)

    client_updated.send(sender=Client, client=existing, changes=changes)
    return FindOrCreateResult(client=existing, is_new=False)


def find_or_create_client(
    contact_info: ContactInfo,
    channel: str | None = None,
) -> FindOrCreateResult:
    """
    Find an existing client by email or phone, or create a new one.

    A matched client only gains contact fields it did not have; populated
    fields are never overwritten.

    Args:
        contact_info: Contact details from the order/meeting workflow
        channel: Order channel (instagram, email, whatsapp, phone, walk_in, ...)

    Returns:
        FindOrCreateResult(client, is_new)

    Raises:
        ClientmanError: CONTACT_REQUIRED, LOOKUP_FAILED or CREATE_FAILED
    """
    info = contact_info
    try:
        Gates.contact_presence(info.email, info.phone, info.instagram_handle)
    except GateError as exc:
        raise ClientmanError("CONTACT_REQUIRED") from exc

    existing = find_match(info)
    if existing:
        return _enrich(existing, info, channel)

    preferred = infer_preferred_contact(channel, info)
    try:
        with transaction.atomic():
            client = Client.objects.create(
                name=info.name,
                email=info.email or "",
                phone=info.phone or "",
                whatsapp=info.whatsapp or info.phone or "",
                instagram_handle=info.instagram_handle or "",
                preferred_contact=preferred or "",
                notes=info.notes or "",
            )
    except IntegrityError as exc:
        # Unique email/phone hit: someone created the same client first
        winner = find_match(info)
        if winner is None:
            raise ClientmanError(
                "CREATE_FAILED", f"Failed to create client: {exc}"
            ) from exc
        logger.info("Client creation raced, using existing client %s", winner.pk)
        return _enrich(winner, info, channel)
    except DatabaseError as exc:
        raise ClientmanError("CREATE_FAILED", f"Failed to create client: {exc}") from exc

    logger.info("Created client %s (channel=%s)", client.pk, channel)
    client_created.send(sender=Client, client=client)
    return FindOrCreateResult(client=client, is_new=True)


# ======================================================================
# Search
# ======================================================================


def _search_q(term: str) -> Q:
    return (
        Q(name__icontains=term)
        | Q(email__icontains=term)
        | Q(phone__icontains=term)
    )


def _clamp_limit(limit: int | None, default: int) -> int:
    """None, zero or negative gives the default; the rest is capped at MAX_PAGE_SIZE."""
    if limit is None or limit <= 0:
        return default
    return min(limit, clientman_settings.MAX_PAGE_SIZE)


def search_clients(query: str | None, limit: int | None = None) -> list[ClientSearchResult]:
    """
    Autocomplete search.

    Short queries (under SEARCH_MIN_QUERY_LENGTH) return the most recently
    active clients; otherwise name/email/phone substring matches, most
    frequent clients first. A missing, zero or negative limit means
    SEARCH_DEFAULT_LIMIT.
    """
    limit = _clamp_limit(limit, clientman_settings.SEARCH_DEFAULT_LIMIT)
    term = (query or "").strip()

    if len(term) < clientman_settings.SEARCH_MIN_QUERY_LENGTH:
        qs = Client.objects.order_by(F("last_order_date").desc(nulls_last=True), "name")
    else:
        qs = Client.objects.filter(_search_q(term)).order_by("-total_orders", "name")

    return [ClientSearchResult.from_client(c) for c in qs[:limit]]


# ======================================================================
# Deletion
# ======================================================================


def delete_client(client_id) -> DeletionResult:
    """Delete a client that owns no orders. Never raises."""
    pk = parse_uuid(client_id)
    if pk is None:
        return DeletionResult(success=False, error="Client not found")

    try:
        Gates.deletion_safety(pk)
    except GateError as exc:
        return DeletionResult(success=False, error=exc.message)
    except DatabaseError as exc:
        logger.warning("Order check for client %s failed: %s", pk, exc)
        return DeletionResult(success=False, error=f"Failed to check orders: {exc}")

    try:
        with transaction.atomic():
            deleted, _ = Client.objects.filter(pk=pk).delete()
    except ProtectedError:
        return DeletionResult(success=False, error="Cannot delete client with existing orders")
    except DatabaseError as exc:
        logger.exception("Failed to delete client %s", pk)
        return DeletionResult(success=False, error=f"Failed to delete client: {exc}")

    if not deleted:
        return DeletionResult(success=False, error="Client not found")

    logger.info("Deleted client %s", pk)
    return DeletionResult(success=True)


# ======================================================================
# Admin listing and manual edits
# ======================================================================


SORTABLE_FIELDS = {
    "name",
    "email",
    "total_orders",
    "total_spent",
    "first_order_date",
    "last_order_date",
    "created_at",
    "updated_at",
}

UPDATABLE_FIELDS = {
    "name",
    "email",
    "phone",
    "whatsapp",
    "instagram_handle",
    "preferred_contact",
    "notes",
    "client_type",
}


def list_clients(
    page: int = 1,
    limit: int | None = None,
    search: str = "",
    sort_by: str = "last_order_date",
    sort_order: str = "desc",
    preferred_contact: str = "",
) -> ClientPage:
    """Paginated client listing for the admin dashboard.

    A missing, zero or negative limit means LIST_PAGE_SIZE.
    """
    limit = _clamp_limit(limit, clientman_settings.LIST_PAGE_SIZE)
    page = max(page, 1)

    qs = Client.objects.all()
    term = (search or "").strip()
    if term:
        qs = qs.filter(_search_q(term))
    if preferred_contact:
        qs = qs.filter(preferred_contact=preferred_contact)

    if sort_by not in SORTABLE_FIELDS:
        sort_by = "last_order_date"
    if sort_by == "total_spent":
        expr = Cast("total_spent", DecimalField(max_digits=14, decimal_places=2))
    else:
        expr = F(sort_by)
    if sort_order == "asc":
        ordering = expr.asc(nulls_last=True)
    else:
        ordering = expr.desc(nulls_last=True)
    qs = qs.order_by(ordering, "name")

    total = qs.count()
    offset = (page - 1) * limit
    return ClientPage(items=list(qs[offset : offset + limit]), total=total, page=page, limit=limit)


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _check_choices(values: dict) -> None:
    if values.get("preferred_contact") and values["preferred_contact"] not in PreferredContact.values:
        raise ClientmanError(
            "INVALID_CHOICE",
            f"Invalid preferred contact: {values['preferred_contact']}",
        )
    if "client_type" in values and values["client_type"] not in ClientType.values:
        raise ClientmanError("INVALID_CHOICE", f"Invalid client type: {values['client_type']}")


def create_client(
    name: str,
    email: str = "",
    phone: str = "",
    whatsapp: str = "",
    instagram_handle: str = "",
    preferred_contact: str = "",
    notes: str = "",
    client_type: str = ClientType.INDIVIDUAL,
) -> Client:
    """
    Create a client by hand (admin form).

    Raises:
        ClientmanError: NAME_REQUIRED, CONTACT_REQUIRED, INVALID_CHOICE or
            DUPLICATE_CONTACT
    """
    values = {
        "name": _clean(name),
        "email": _clean(email),
        "phone": _clean(phone),
        "whatsapp": _clean(whatsapp) or _clean(phone),
        "instagram_handle": _clean(instagram_handle),
        "preferred_contact": _clean(preferred_contact),
        "notes": _clean(notes),
        "client_type": _clean(client_type) or ClientType.INDIVIDUAL,
    }
    if not values["name"]:
        raise ClientmanError("NAME_REQUIRED")
    if not Gates.check_contact_presence(
        values["email"], values["phone"], values["instagram_handle"]
    ):
        raise ClientmanError("CONTACT_REQUIRED")
    _check_choices(values)

    try:
        with transaction.atomic():
            client = Client.objects.create(**values)
    except IntegrityError as exc:
        raise ClientmanError("DUPLICATE_CONTACT") from exc

    client_created.send(sender=Client, client=client)
    return client


def update_client(client_id, **fields) -> Client:
    """
    Update client fields (only whitelisted fields are accepted).

    Statistics fields are not updatable; see services.stats.

    Raises:
        ClientmanError: NO_FIELDS, CLIENT_NOT_FOUND, NAME_REQUIRED,
            INVALID_CHOICE or DUPLICATE_CONTACT
    """
    values = {key: _clean(value) for key, value in fields.items() if key in UPDATABLE_FIELDS}
    if not values:
        raise ClientmanError("NO_FIELDS")
    if "name" in values and not values["name"]:
        raise ClientmanError("NAME_REQUIRED")
    _check_choices(values)

    client = get_client_by_id(client_id)
    if client is None:
        raise ClientmanError("CLIENT_NOT_FOUND", client_id=str(client_id))

    changes = {}
    for key, value in values.items():
        old_value = getattr(client, key)
        if old_value != value:
            changes[key] = {"old": old_value, "new": value}
        setattr(client, key, value)

    try:
        with transaction.atomic():
            client.save(update_fields=[*values, "updated_at"])
    except IntegrityError as exc:
        raise ClientmanError("DUPLICATE_CONTACT") from exc

    if changes:
        client_updated.send(sender=Client, client=client, changes=changes)
    return client
