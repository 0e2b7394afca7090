"""
Django Clientman - Client identity and order statistics.

Usage:
    from clientman import ClientService
    from clientman.protocols import ContactInfo

    result = ClientService.find_or_create_client(
        ContactInfo(name="Anna", email="anna@example.ch"), channel="instagram"
    )
    ClientService.update_client_stats(result.client.id)
    ClientService.search_clients("ann")
"""


def __getattr__(name):
    if name == "ClientService":
        from clientman.service import ClientService

        return ClientService
    if name == "ClientmanError":
        from clientman.exceptions import ClientmanError

        return ClientmanError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ClientService", "ClientmanError"]
__version__ = "0.1.0"
