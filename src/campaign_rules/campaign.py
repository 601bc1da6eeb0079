"""
Single-campaign derivations: labels, progress, playability and health.

Everything here is a pure function of its arguments. The health check is
the only rule that depends on time, and it takes the current instant as a
parameter.
"""

import math
from datetime import datetime
from enum import Enum

from .clock import resolve_now
from .config import CampaignRulesConfig, get_config
from .models import CampaignModel, Campaign, CampaignStatus, DifficultyLevel


# =============================================================================
# Label tables
# =============================================================================

CAMPAIGN_STATUS_LABELS: dict[CampaignStatus, str] = {
    CampaignStatus.PLANNING: "Planning",
    CampaignStatus.ACTIVE: "Active",
    CampaignStatus.ON_HOLD: "On Hold",
    CampaignStatus.COMPLETED: "Completed",
    CampaignStatus.ARCHIVED: "Archived",
}

DIFFICULTY_LABELS: dict[DifficultyLevel, str] = {
    DifficultyLevel.CASUAL: "Casual",
    DifficultyLevel.NORMAL: "Normal",
    DifficultyLevel.HARD: "Hard",
    DifficultyLevel.DEADLY: "Deadly",
}

# Multiplier applied to encounter CR budgets
ENCOUNTER_MULTIPLIERS: dict[DifficultyLevel, float] = {
    DifficultyLevel.CASUAL: 0.75,
    DifficultyLevel.NORMAL: 1.0,
    DifficultyLevel.HARD: 1.25,
    DifficultyLevel.DEADLY: 1.5,
}

PLAYABLE_STATUSES = frozenset({CampaignStatus.ACTIVE, CampaignStatus.PLANNING})
LOCKED_STATUSES = frozenset({CampaignStatus.COMPLETED, CampaignStatus.ARCHIVED})


def _require_exhaustive(table: dict, enum_cls: type[Enum], table_name: str) -> None:
    missing = [member.name for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{table_name} has no entry for: {', '.join(missing)}")


_require_exhaustive(CAMPAIGN_STATUS_LABELS, CampaignStatus, "CAMPAIGN_STATUS_LABELS")
_require_exhaustive(DIFFICULTY_LABELS, DifficultyLevel, "DIFFICULTY_LABELS")
_require_exhaustive(ENCOUNTER_MULTIPLIERS, DifficultyLevel, "ENCOUNTER_MULTIPLIERS")


# =============================================================================
# Result models
# =============================================================================

class HealthStatus(str, Enum):
    """Triage tier of a campaign health check."""
    HEALTHY = "healthy"
    WARNING = "warning"
    ATTENTION = "attention"


class CampaignProgress(CampaignModel):
    """Integer completion percentages for a campaign."""
    quest_completion: int
    session_progress: int
    character_growth: int


class HealthReport(CampaignModel):
    """Issues found by the health check, each paired with a suggestion."""
    status: HealthStatus
    issues: list[str]
    suggestions: list[str]


class ListEntry(CampaignModel):
    """Display strings for one row of a campaign list."""
    primary: str
    secondary: str
    status: str
    badge: str
    last_activity: str


# =============================================================================
# Helpers
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def _percentage(numerator: float, denominator: float) -> int:
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


# =============================================================================
# Labels and formatting
# =============================================================================

def get_campaign_status_label(status: CampaignStatus) -> str:
    return CAMPAIGN_STATUS_LABELS[status]


def get_difficulty_label(difficulty: DifficultyLevel) -> str:
    return DIFFICULTY_LABELS[difficulty]


def get_encounter_multiplier(difficulty: DifficultyLevel) -> float:
    """Return the encounter budget multiplier for a difficulty level."""
    return ENCOUNTER_MULTIPLIERS[difficulty]


def format_campaign_summary(campaign: Campaign) -> str:
    """Return "<name> - <status label>"."""
    return f"{campaign.name} - {get_campaign_status_label(campaign.status)}"


def get_session_info(campaign: Campaign) -> str:
    return f"Session {campaign.current_session} of {campaign.info.total_sessions}"


def get_next_session_number(campaign: Campaign) -> int:
    return campaign.current_session + 1


def format_for_list(campaign: Campaign) -> ListEntry:
    """Build the display strings used by campaign list rows."""
    if campaign.last_session_date is not None:
        last_activity = f"Last session: {campaign.last_session_date:%Y-%m-%d}"
    else:
        last_activity = "No sessions yet"

    return ListEntry(
        primary=campaign.name,
        secondary=campaign.description,
        status=get_campaign_status_label(campaign.status),
        badge=f"{campaign.active_characters} active PCs",
        last_activity=last_activity,
    )


# =============================================================================
# Derived metrics
# =============================================================================

def get_campaign_progress(campaign: Campaign) -> CampaignProgress:
    """Compute quest, session and character-growth percentages.

    Each percentage is 0 when its denominator is 0. Character growth is
    linear from level 1 (0%) to level 20 (100%); an unset level counts as 0%.
    """
    info = campaign.info

    if campaign.average_level > 1:
        character_growth = _percentage(campaign.average_level - 1, 19)
    else:
        character_growth = 0

    return CampaignProgress(
        quest_completion=_percentage(info.completed_quests, info.total_quests),
        session_progress=_percentage(campaign.current_session, info.total_sessions),
        character_growth=character_growth,
    )


def is_campaign_playable(campaign: Campaign) -> bool:
    return campaign.is_active and campaign.status in PLAYABLE_STATUSES


def can_modify_campaign(campaign: Campaign) -> bool:
    """Completed and Archived campaigns are read-only."""
    return campaign.status not in LOCKED_STATUSES


def get_campaign_health_status(
    campaign: Campaign,
    now: datetime | None = None,
    config: CampaignRulesConfig | None = None,
) -> HealthReport:
    """Run the rule-based health check on a single campaign.

    Args:
        campaign: The campaign to diagnose.
        now: Current instant, used for the stale-session rule. Defaults to
            the real clock.
        config: Thresholds to use. Defaults to the process configuration.

    Returns:
        HealthReport with one issue and one suggestion per triggered rule.
        Status is healthy with no issues, warning with one or two, and
        attention with three or more.
    """
    config = config or get_config()
    issues: list[str] = []
    suggestions: list[str] = []

    if campaign.active_characters == 0:
        issues.append("No active characters")
        suggestions.append("Add characters to get the campaign started")

    if campaign.info.total_quests == 0:
        issues.append("No quests defined")
        suggestions.append("Create a few quests to guide the story")

    if campaign.info.total_npcs == 0:
        issues.append("No NPCs created")
        suggestions.append("Add NPCs to bring the world to life")

    if campaign.last_session_date is not None:
        elapsed = resolve_now(now) - campaign.last_session_date
        days_since_last_session = math.floor(elapsed.total_seconds() / 86400)
        if days_since_last_session > config.stale_session_days:
            issues.append(f"Last session was over {config.stale_session_days} days ago")
            suggestions.append("Consider scheduling a new session")

    if not issues:
        status = HealthStatus.HEALTHY
    elif len(issues) <= 2:
        status = HealthStatus.WARNING
    else:
        status = HealthStatus.ATTENTION

    return HealthReport(status=status, issues=issues, suggestions=suggestions)


__all__ = [
    "CAMPAIGN_STATUS_LABELS",
    "DIFFICULTY_LABELS",
    "ENCOUNTER_MULTIPLIERS",
    "PLAYABLE_STATUSES",
    "LOCKED_STATUSES",
    "HealthStatus",
    "CampaignProgress",
    "HealthReport",
    "ListEntry",
    "round_half_up",
    "get_campaign_status_label",
    "get_difficulty_label",
    "get_encounter_multiplier",
    "format_campaign_summary",
    "get_session_info",
    "get_next_session_number",
    "format_for_list",
    "get_campaign_progress",
    "is_campaign_playable",
    "can_modify_campaign",
    "get_campaign_health_status",
]
