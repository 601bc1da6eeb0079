"""
Collection-level views over campaigns.

Sorting, filtering, search, statistics and forecasting. Every function
returns a new list or model and never mutates the collection it is given.
Time-dependent views take the current instant as a parameter.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from operator import attrgetter

from .campaign import get_campaign_health_status, round_half_up
from .clock import resolve_now
from .config import CampaignRulesConfig, get_config
from .models import Campaign, CampaignModel, CampaignStatus, DifficultyLevel

logger = logging.getLogger("campaign-rules.aggregation")

NO_SETTING = "N/A"
WEEK = timedelta(weeks=1)


class OverallStats(CampaignModel):
    """Totals and averages across a collection of campaigns."""
    total_campaigns: int = 0
    active_campaigns: int = 0
    completed_campaigns: int = 0
    total_characters: int = 0
    total_sessions: int = 0
    average_sessions_per_campaign: int = 0
    most_popular_setting: str = NO_SETTING
    average_campaign_level: int = 0


class DurationEstimate(CampaignModel):
    """Play cadence so far and a projected end date."""
    weeks_active: int
    sessions_per_week: float
    projected_end_date: datetime | None = None


# =============================================================================
# Ordering and filtering
# =============================================================================

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


def _last_session_key(campaign: Campaign) -> tuple[bool, datetime]:
    last = campaign.last_session_date
    return (last is not None, last or _NEVER)


def sort_campaigns_by_activity(campaigns: Iterable[Campaign]) -> list[Campaign]:
    """Order campaigns by how recently they have been played.

    Active campaigns come first. Within the same activity flag, campaigns
    with a last session come before those without, most recent first;
    remaining ties go to the most recently created. The sort is stable and
    the input is left as it is.
    """
    # Least significant key first; each pass is stable
    ordered = sorted(campaigns, key=attrgetter("created_at"), reverse=True)
    ordered.sort(key=_last_session_key, reverse=True)
    ordered.sort(key=lambda c: not c.is_active)
    return ordered


def filter_campaigns_by_status(campaigns: Iterable[Campaign], status: CampaignStatus) -> list[Campaign]:
    return [c for c in campaigns if c.status == status]


def filter_campaigns_by_difficulty(campaigns: Iterable[Campaign], difficulty: DifficultyLevel) -> list[Campaign]:
    return [c for c in campaigns if c.info.difficulty_level == difficulty]


def get_active_campaigns(campaigns: Iterable[Campaign]) -> list[Campaign]:
    return [c for c in campaigns if c.is_active]


def search_campaigns(campaigns: Iterable[Campaign], query: str) -> list[Campaign]:
    """Case-insensitive substring search over name, description, setting and DM notes.

    A blank query matches everything.
    """
    needle = query.lower().strip()
    if not needle:
        return list(campaigns)

    return [
        c for c in campaigns
        if any(
            needle in text.lower()
            for text in (c.name, c.description, c.setting, c.dm_notes)
        )
    ]


def is_name_unique(campaigns: Iterable[Campaign], name: str, exclude_id: str | None = None) -> bool:
    """Check that no other campaign uses ``name``, ignoring case and surrounding spaces.

    Args:
        campaigns: Campaigns to compare against.
        name: Candidate name.
        exclude_id: Id of the campaign being renamed, which may keep its own name.
    """
    target = name.strip().lower()
    return not any(
        c.name.strip().lower() == target and c.id != exclude_id
        for c in campaigns
    )


# =============================================================================
# Statistics
# =============================================================================

def calculate_overall_stats(campaigns: Iterable[Campaign]) -> OverallStats:
    """Aggregate counts and averages over a collection.

    The most popular setting is the one used by the most campaigns, the
    first one encountered winning ties. The average level only considers
    campaigns whose level has been set.
    """
    campaigns = list(campaigns)
    if not campaigns:
        return OverallStats()

    total_sessions = sum(c.info.total_sessions for c in campaigns)
    # Counter keeps first-encountered order among equal counts
    setting_counts = Counter(c.setting for c in campaigns)
    levels = [c.average_level for c in campaigns if c.average_level > 0]

    return OverallStats(
        total_campaigns=len(campaigns),
        active_campaigns=sum(1 for c in campaigns if c.is_active),
        completed_campaigns=sum(1 for c in campaigns if c.status == CampaignStatus.COMPLETED),
        total_characters=sum(c.info.total_characters for c in campaigns),
        total_sessions=total_sessions,
        average_sessions_per_campaign=round_half_up(total_sessions / len(campaigns)),
        most_popular_setting=setting_counts.most_common(1)[0][0],
        average_campaign_level=round_half_up(sum(levels) / len(levels)) if levels else 0,
    )


# =============================================================================
# Time-dependent views
# =============================================================================

def get_campaigns_needing_attention(
    campaigns: Iterable[Campaign],
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> list[Campaign]:
    """Return campaigns whose health check reports at least one issue."""
    now = resolve_now(now)
    return [
        c for c in campaigns
        if get_campaign_health_status(c, now, config).issues
    ]


def get_recently_updated(
    campaigns: Iterable[Campaign],
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> list[Campaign]:
    """Return campaigns updated inside the recent window, newest first."""
    config = config or get_config()
    cutoff = resolve_now(now) - timedelta(days=config.recent_update_days)
    recent = [c for c in campaigns if c.updated_at > cutoff]
    return sorted(recent, key=lambda c: c.updated_at, reverse=True)


def estimate_duration(
    campaign: Campaign,
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> DurationEstimate:
    """Estimate the play cadence of a campaign and when it might end.

    Weeks active counts started weeks since creation, at least one. The
    projection assumes a campaign runs for ``estimated_campaign_sessions``
    sessions in total and keeps its current cadence; it is omitted when
    no session has been played yet.
    """
    config = config or get_config()
    now = resolve_now(now)

    weeks_active = max(1, math.ceil((now - campaign.created_at) / WEEK))
    total_sessions = campaign.info.total_sessions
    sessions_per_week = total_sessions / weeks_active if total_sessions > 0 else 0.0

    projected_end_date = None
    if sessions_per_week > 0:
        remaining_sessions = max(0, config.estimated_campaign_sessions - total_sessions)
        weeks_remaining = remaining_sessions / sessions_per_week
        try:
            projected_end_date = now + weeks_remaining * WEEK
        except OverflowError:
            logger.debug(f"Projected end of campaign {campaign.id} is out of the calendar range")

    return DurationEstimate(
        weeks_active=weeks_active,
        sessions_per_week=round_half_up(sessions_per_week * 100) / 100,
        projected_end_date=projected_end_date,
    )


__all__ = [
    "NO_SETTING",
    "OverallStats",
    "DurationEstimate",
    "sort_campaigns_by_activity",
    "filter_campaigns_by_status",
    "filter_campaigns_by_difficulty",
    "get_active_campaigns",
    "search_campaigns",
    "is_name_unique",
    "calculate_overall_stats",
    "get_campaigns_needing_attention",
    "get_recently_updated",
    "estimate_duration",
]
