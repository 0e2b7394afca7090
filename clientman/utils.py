"""Pure helpers for contact handling. No database access."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from clientman.models.client import PreferredContact
from clientman.models.order import OrderChannel

if TYPE_CHECKING:
    from clientman.models import Client
    from clientman.protocols.client import ContactInfo

# Contact fields that find_or_create_client may back-fill on a matched client
ENRICHABLE_FIELDS = ("email", "phone", "whatsapp", "instagram_handle")

_DIRECT_CHANNELS = {
    OrderChannel.INSTAGRAM: PreferredContact.INSTAGRAM,
    OrderChannel.EMAIL: PreferredContact.EMAIL,
    OrderChannel.WHATSAPP: PreferredContact.WHATSAPP,
}


def parse_uuid(value) -> uuid.UUID | None:
    """UUID from a UUID or its string form; None when malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def phone_digits(phone: str | None) -> str:
    """Digits of a phone number ("+41 79 123 45 67" -> "41791234567")."""
    if not phone:
        return ""
    return "".join(filter(str.isdigit, phone))


def infer_preferred_contact(
    channel: str | None,
    contact_info: ContactInfo,
) -> str | None:
    """
    Infer the preferred contact method from the order channel.

    An explicit preference always wins. Phone and walk-in orders only
    prefer phone when a number was given. Unknown channels fall back to
    the first populated of email, phone, Instagram.

    Returns:
        A PreferredContact value or None
    """
    if contact_info.preferred_contact:
        return contact_info.preferred_contact

    if channel in _DIRECT_CHANNELS:
        return _DIRECT_CHANNELS[channel].value

    if channel in (OrderChannel.PHONE, OrderChannel.WALK_IN):
        return PreferredContact.PHONE.value if contact_info.phone else None

    if contact_info.email:
        return PreferredContact.EMAIL.value
    if contact_info.phone:
        return PreferredContact.PHONE.value
    if contact_info.instagram_handle:
        return PreferredContact.INSTAGRAM.value
    return None


def diff_contact_fields(existing: Client, incoming: ContactInfo) -> dict[str, str]:
    """
    Fields to back-fill on an existing client.

    Only empty fields on ``existing`` are filled; populated fields are never
    overwritten. An empty dict means nothing to update.
    """
    patch = {}
    for field in ENRICHABLE_FIELDS:
        value = getattr(incoming, field)
        if value and not getattr(existing, field):
            patch[field] = value
    return patch
