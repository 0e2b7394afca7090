"""
Clientman Gates - Validation rules.

G1: ContactPresence - A client needs an email, phone or Instagram handle
G2: DeletionSafety - A client that owns orders cannot be deleted
"""

from dataclasses import dataclass


class GateError(Exception):
    """Gate validation error."""

    def __init__(self, gate_name: str, message: str, details: dict | None = None):
        self.gate_name = gate_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{gate_name}] {message}")


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Clientman validation gates."""

    # =========================================================================
    # G1: Contact Presence
    # =========================================================================

    @classmethod
    def contact_presence(
        cls,
        email: str | None = None,
        phone: str | None = None,
        instagram_handle: str | None = None,
    ) -> GateResult:
        """
        G1: At least one reachable contact method.

        WhatsApp alone does not count: it is never used for matching, so such
        a client could neither be reached by the lookup nor merged.

        Raises:
            GateError: If all three are empty
        """
        if not (email or phone or instagram_handle):
            raise GateError(
                "G1_ContactPresence",
                "At least one contact method (email, phone, or Instagram) is required.",
            )
        return GateResult(True, "G1_ContactPresence")

    @classmethod
    def check_contact_presence(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.contact_presence(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Deletion Safety
    # =========================================================================

    @classmethod
    def deletion_safety(cls, client_id, backend=None) -> GateResult:
        """
        G2: Client owns zero orders.

        Args:
            client_id: Client primary key
            backend: OrderHistoryBackend (defaults to the configured one)

        Raises:
            GateError: If at least one order exists
        """
        if backend is None:
            from clientman.adapters.orders import get_order_backend

            backend = get_order_backend()

        if backend.has_orders(client_id):
            raise GateError(
                "G2_DeletionSafety",
                "Cannot delete client with existing orders",
                {"client_id": str(client_id)},
            )
        return GateResult(True, "G2_DeletionSafety")

    @classmethod
    def check_deletion_safety(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.deletion_safety(*args, **kwargs)
            return True
        except GateError:
            return False
