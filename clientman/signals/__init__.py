"""
Clientman signals - public event API.

Emitted signals:
- client_created: Emitted by services.client.find_or_create_client() and create_client()
- client_updated: Emitted when contact fields change (enrichment or update_client())
- client_stats_updated: Emitted by services.stats.update_client_stats()
"""

from django.dispatch import Signal

client_created = Signal()  # sender=Client, client=Client
client_updated = Signal()  # sender=Client, client=Client, changes=dict
client_stats_updated = Signal()  # sender=Client, client_id=UUID, stats=ClientStats
