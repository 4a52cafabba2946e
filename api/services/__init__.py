"""Business Logic Services"""

from api.services.utils import (
    utc_now,
    ensure_utc,
)

__all__ = [
    "utc_now",
    "ensure_utc",
]
