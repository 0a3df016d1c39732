"""Shared enums for models and API."""

from enum import Enum


class PartnershipStatus(str, Enum):
    """Stored partnership states. Rejection and removal delete the row."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"


class PartnershipResponse(str, Enum):
    """Answers a recipient can give to a pending request."""

    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
