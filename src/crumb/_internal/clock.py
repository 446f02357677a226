"""Wall-clock access.

Every time-dependent operation in crumb reads the clock through ``now()``
so it can be frozen in tests.
"""

import time


def now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
