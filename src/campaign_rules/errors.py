"""
Exception hierarchy for the campaign lifecycle helpers.

Validation functions never raise: they return lists of messages. These
exceptions are only raised by the lifecycle transitions, which refuse to
build or change a campaign from invalid input.
"""

from __future__ import annotations

from typing import Any


class CampaignRulesError(Exception):
    """Base exception for all campaign rules errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CampaignValidationError(CampaignRulesError):
    """A create or update request broke one or more field rules.

    Attributes:
        errors: Every violated rule, as user-facing messages
    """

    def __init__(self, errors: list[str], details: dict[str, Any] | None = None):
        super().__init__("; ".join(errors) or "Invalid campaign data", details)
        self.errors = list(errors)


class CampaignLockedError(CampaignRulesError):
    """The campaign is Completed or Archived and can no longer be modified.

    Attributes:
        campaign_id: Id of the locked campaign
        status: The status that locks it
    """

    def __init__(self, campaign_id: str, status: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Campaign {campaign_id} is {status} and cannot be modified",
            details,
        )
        self.campaign_id = campaign_id
        self.status = status


__all__ = [
    "CampaignRulesError",
    "CampaignValidationError",
    "CampaignLockedError",
]
