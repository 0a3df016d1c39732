"""ORM models - import all so Base.metadata is complete for migrations."""

from weighin.models.goal import Goal
from weighin.models.partnership import Partnership
from weighin.models.user import PrivacySettings, User
from weighin.models.weight import Weight

__all__ = [
    "Goal",
    "Partnership",
    "PrivacySettings",
    "User",
    "Weight",
]
