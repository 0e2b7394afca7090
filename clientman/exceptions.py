"""Clientman exceptions."""


class ClientmanError(Exception):
    """
    Structured exception for client operations.

    Usage:
        try:
            result = find_or_create_client(info)
        except ClientmanError as e:
            if e.code == "CONTACT_REQUIRED":
                return bad_request(e.message)
    """

    _default_messages = {
        "CLIENT_NOT_FOUND": "Client not found",
        "CONTACT_REQUIRED": (
            "At least one contact method (email, phone, or Instagram) is required"
        ),
        "NAME_REQUIRED": "Name is required",
        "NO_FIELDS": "No fields to update",
        "INVALID_CHOICE": "Invalid value",
        "DUPLICATE_CONTACT": "A client with this email or phone already exists",
        "LOOKUP_FAILED": "Failed to look up existing client",
        "CREATE_FAILED": "Failed to create client",
        "STATS_FETCH_FAILED": "Failed to fetch order stats",
        "STATS_WRITE_FAILED": "Failed to update client stats",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}
