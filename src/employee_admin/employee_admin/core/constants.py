"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Deployments override the business values through the settings module.
"""

from decimal import Decimal

DEFAULT_NORMAL_HOURS_PER_DAY = Decimal("8")
DEFAULT_ANNUAL_LEAVE_ENTITLEMENT = 25
NOTES_SEPARATOR = "; "
SECONDS_PER_HOUR = Decimal("3600")
