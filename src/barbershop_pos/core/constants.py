"""Constants and defaults.

Note: Keep business constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta
from decimal import Decimal

LATE_GRACE_MINUTES = 20
LOGIN_OPENS_AT = time(7, 0)
WEEKDAY_START = time(8, 0)
WEEKEND_START = time(9, 0)

# (month, day) pairs, year-independent.
PUBLIC_HOLIDAYS = frozenset({(12, 12), (6, 1), (10, 20), (5, 1)})

SHORT_DAY_THRESHOLD = timedelta(hours=11)
AUTO_CLOSE_AT = time(23, 0)

UNKNOWN_RECIPIENT = "Unknown"
UNMATCHED_USER_ID = 0

# Matches transactions.amount DECIMAL(12, 2).
AMOUNT_STEP = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")
