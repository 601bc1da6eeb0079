"""
Campaign lifecycle transitions.

Each transition returns a new, fully re-validated Campaign and leaves its
input untouched; persisting the result is the caller's job. Transitions
that edit a campaign refuse to run on Completed or Archived campaigns.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .campaign import can_modify_campaign
from .clock import resolve_now
from .config import CampaignRulesConfig
from .errors import CampaignLockedError, CampaignValidationError
from .models import (
    Campaign,
    CampaignInfo,
    CampaignStatus,
    CreateCampaignRequest,
    UpdateCampaignRequest,
)
from .validation import (
    coerce_create_request,
    coerce_update_request,
    validate_create_data,
    validate_update_data,
)

logger = logging.getLogger("campaign-rules.lifecycle")

DEFAULT_PLAYER_COUNT = 4
STARTING_LEVEL = 1.0

# Patch fields that live on CampaignInfo rather than on the campaign itself
_INFO_FIELDS = {"difficulty_level"}


def _rebuild(campaign: Campaign, now: datetime, **changes: Any) -> Campaign:
    """Return a validated copy of ``campaign`` with ``changes`` applied."""
    data = campaign.model_dump()
    info_changes = changes.pop("info", None)
    if info_changes:
        data["info"].update(info_changes)
    data.update(changes)
    # updated_at never moves backwards
    data["updated_at"] = max(now, campaign.updated_at)
    return Campaign.model_validate(data)


def _ensure_modifiable(campaign: Campaign, action: str) -> None:
    if not can_modify_campaign(campaign):
        logger.warning(f"❌ Cannot {action} campaign '{campaign.name}' ({campaign.id}): status is {campaign.status.value}")
        raise CampaignLockedError(campaign.id, campaign.status.value)


def create_campaign(
    request: CreateCampaignRequest | Mapping[str, Any],
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> Campaign:
    """Build a new campaign from a creation request.

    Args:
        request: The creation request, as a model or a mapping.
        now: Creation instant. Defaults to the real clock.
        config: Validation limits. Defaults to the process configuration.

    Returns:
        A Planning, active campaign at session 0 with empty statistics.

    Raises:
        CampaignValidationError: If the request breaks any field rule.
    """
    request = coerce_create_request(request)
    errors = validate_create_data(request, config)
    if errors:
        logger.warning(f"❌ Rejected campaign creation with {len(errors)} validation error(s)")
        raise CampaignValidationError(errors)

    now = resolve_now(now)
    campaign = Campaign(
        name=request.name,
        description=request.description,
        setting=request.setting,
        dm_notes=request.dm_notes or "",
        current_session=0,
        is_active=True,
        info=CampaignInfo(difficulty_level=request.difficulty_level),
        status=CampaignStatus.PLANNING,
        player_count=request.player_count if request.player_count is not None else DEFAULT_PLAYER_COUNT,
        average_level=STARTING_LEVEL,
        created_at=now,
        updated_at=now,
    )
    logger.debug(f"✅ Created campaign '{campaign.name}' ({campaign.id})")
    return campaign


def apply_update(
    campaign: Campaign,
    patch: UpdateCampaignRequest | Mapping[str, Any],
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> Campaign:
    """Merge the present fields of a patch into a campaign.

    Raises:
        CampaignLockedError: If the campaign is Completed or Archived.
        CampaignValidationError: If a present field breaks a field rule.
    """
    _ensure_modifiable(campaign, "update")

    patch = coerce_update_request(patch)
    errors = validate_update_data(patch, config)
    if errors:
        logger.warning(f"❌ Rejected update of campaign {campaign.id} with {len(errors)} validation error(s)")
        raise CampaignValidationError(errors)

    present = patch.present_fields()
    info_changes = {k: v for k, v in present.items() if k in _INFO_FIELDS}
    changes = {k: v for k, v in present.items() if k not in _INFO_FIELDS}

    updated = _rebuild(campaign, resolve_now(now), info=info_changes, **changes)
    logger.debug(f"📝 Updated campaign {campaign.id}: {sorted(present)}")
    return updated


def start_session(campaign: Campaign, now: datetime | None = None) -> Campaign:
    """Record a new session; a campaign still in Planning becomes Active.

    Raises:
        CampaignLockedError: If the campaign is Completed or Archived.
    """
    _ensure_modifiable(campaign, "start a session on")

    now = resolve_now(now)
    status = campaign.status
    if status == CampaignStatus.PLANNING:
        status = CampaignStatus.ACTIVE

    updated = _rebuild(
        campaign,
        now,
        current_session=campaign.current_session + 1,
        info={"total_sessions": campaign.info.total_sessions + 1},
        last_session_date=now,
        status=status,
    )
    logger.debug(f"🎲 Started session {updated.current_session} of campaign {campaign.id}")
    return updated


def update_stats(
    campaign: Campaign,
    active_characters: int,
    total_characters: int,
    average_level: float,
    now: datetime | None = None,
) -> Campaign:
    """Refresh the character roll-ups computed by the backend.

    The player count follows the number of active characters.
    """
    return _rebuild(
        campaign,
        resolve_now(now),
        active_characters=active_characters,
        player_count=active_characters,
        average_level=average_level,
        info={"total_characters": total_characters},
    )


def complete_campaign(campaign: Campaign, now: datetime | None = None) -> Campaign:
    """Mark a campaign Completed and inactive.

    Raises:
        CampaignLockedError: If the campaign is already Completed or Archived.
    """
    _ensure_modifiable(campaign, "complete")
    logger.debug(f"🏁 Completing campaign {campaign.id}")
    return _rebuild(campaign, resolve_now(now), status=CampaignStatus.COMPLETED, is_active=False)


def archive_campaign(campaign: Campaign, now: datetime | None = None) -> Campaign:
    """Mark a campaign Archived and inactive. Works from any status."""
    logger.debug(f"📦 Archiving campaign {campaign.id}")
    return _rebuild(campaign, resolve_now(now), status=CampaignStatus.ARCHIVED, is_active=False)


__all__ = [
    "DEFAULT_PLAYER_COUNT",
    "STARTING_LEVEL",
    "create_campaign",
    "apply_update",
    "start_session",
    "update_stats",
    "complete_campaign",
    "archive_campaign",
]
