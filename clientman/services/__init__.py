"""Clientman services.

- clientman.services.client: identity resolution, search, deletion, admin CRUD
- clientman.services.stats: order statistics recomputation
"""

from clientman.services import client
from clientman.services import stats

__all__ = ["client", "stats"]
