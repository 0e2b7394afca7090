"""Management command to rebuild client order statistics."""

from django.core.management.base import BaseCommand, CommandError

from clientman.exceptions import ClientmanError
from clientman.services.stats import recalculate_all, update_client_stats


class Command(BaseCommand):
    help = "Recompute total orders, total spent and first/last order dates"

    def add_arguments(self, parser):
        parser.add_argument(
            "--client",
            dest="client_id",
            default=None,
            help="Only recompute this client (UUID)",
        )

    def handle(self, *args, **options):
        client_id = options["client_id"]
        if client_id:
            try:
                stats = update_client_stats(client_id)
            except ClientmanError as exc:
                raise CommandError(exc.message) from exc
            self.stdout.write(
                self.style.SUCCESS(
                    f"Client {client_id}: {stats.total_orders} orders, "
                    f"{stats.total_spent} spent."
                )
            )
            return

        count = recalculate_all()
        self.stdout.write(self.style.SUCCESS(f"Recalculated statistics for {count} clients."))
