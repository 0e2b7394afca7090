from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ClientmanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "clientman"
    verbose_name = _("Clientman - Clients & Order Statistics")

    def ready(self):
        from clientman import receivers  # noqa: F401
