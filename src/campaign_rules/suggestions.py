"""
Suggestion engine for a collection of campaigns.

Looks at the overall shape of the collection (how many campaigns are
active, paused or still in planning) and produces prioritized, typed
recommendations for display. Suggestions are computed on demand and never
persisted.
"""

from collections.abc import Iterable
from enum import Enum

from .aggregation import filter_campaigns_by_status, get_active_campaigns
from .config import CampaignRulesConfig, get_config
from .models import Campaign, CampaignModel, CampaignStatus, CreateCampaignRequest, DifficultyLevel


COMMON_SETTINGS: list[str] = [
    "Forgotten Realms",
    "Eberron",
    "Ravenloft",
    "Spelljammer",
    "Planescape",
    "Dark Sun",
    "Dragonlance",
    "Homebrew",
    "Critical Role",
    "Custom",
]


class SuggestionType(str, Enum):
    CREATE = "create"
    CONTINUE = "continue"
    ARCHIVE = "archive"
    COMPLETE = "complete"


class SuggestionPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Suggestion(CampaignModel):
    """A recommendation shown to the user."""
    type: SuggestionType
    title: str
    description: str
    priority: SuggestionPriority


class CampaignTemplate(CampaignModel):
    """A ready-made starting point offered on the creation form."""
    name: str
    description: str
    setting: str
    difficulty: DifficultyLevel

    def to_create_request(self) -> CreateCampaignRequest:
        return CreateCampaignRequest(
            name=self.name,
            description=self.description,
            setting=self.setting,
            difficulty_level=self.difficulty,
        )


def generate_campaign_suggestions(
    campaigns: Iterable[Campaign],
    config: CampaignRulesConfig | None = None,
) -> list[Suggestion]:
    """Build the suggestion list for a campaign collection.

    An empty collection yields a single suggestion to create a first
    campaign. Otherwise the rules below are checked in order and every
    rule that fires adds one suggestion:

    1. more active campaigns than ``max_active_campaigns``: archive some
    2. campaigns on hold: resume them
    3. campaigns in planning: start them
    4. no active campaign: create or reactivate one
    """
    campaigns = list(campaigns)
    if not campaigns:
        return [Suggestion(
            type=SuggestionType.CREATE,
            title="Create your first campaign",
            description="Start by creating a new campaign to organize your D&D sessions",
            priority=SuggestionPriority.HIGH,
        )]

    config = config or get_config()
    active = get_active_campaigns(campaigns)
    on_hold = filter_campaigns_by_status(campaigns, CampaignStatus.ON_HOLD)
    planning = filter_campaigns_by_status(campaigns, CampaignStatus.PLANNING)
    suggestions: list[Suggestion] = []

    if len(active) > config.max_active_campaigns:
        suggestions.append(Suggestion(
            type=SuggestionType.ARCHIVE,
            title="Too many active campaigns",
            description="Consider archiving some campaigns to keep things organized",
            priority=SuggestionPriority.MEDIUM,
        ))

    if on_hold:
        suggestions.append(Suggestion(
            type=SuggestionType.CONTINUE,
            title="Campaigns on hold",
            description=f"You have {len(on_hold)} campaigns on hold that you could resume",
            priority=SuggestionPriority.MEDIUM,
        ))

    if planning:
        suggestions.append(Suggestion(
            type=SuggestionType.CONTINUE,
            title="Campaigns ready to start",
            description=f"You have {len(planning)} campaigns in planning ready to begin",
            priority=SuggestionPriority.HIGH,
        ))

    if not active:
        suggestions.append(Suggestion(
            type=SuggestionType.CREATE,
            title="No active campaigns",
            description="Create a new campaign or reactivate an existing one",
            priority=SuggestionPriority.HIGH,
        ))

    return suggestions


def get_creation_suggestions() -> list[CampaignTemplate]:
    """Return starter templates for the campaign creation form."""
    return [
        CampaignTemplate(
            name="Curse of Strahd",
            description="A gothic horror campaign set in Barovia",
            setting="Ravenloft",
            difficulty=DifficultyLevel.HARD,
        ),
        CampaignTemplate(
            name="Homebrew Campaign",
            description="A custom campaign in your own fantasy world",
            setting="Homebrew",
            difficulty=DifficultyLevel.NORMAL,
        ),
        CampaignTemplate(
            name="Heroes of Waterdeep",
            description="Adventures in the most famous city of the Forgotten Realms",
            setting="Forgotten Realms",
            difficulty=DifficultyLevel.NORMAL,
        ),
        CampaignTemplate(
            name="Exploring Eberron",
            description="Industrial magic and intrigue in a world scarred by war",
            setting="Eberron",
            difficulty=DifficultyLevel.HARD,
        ),
        CampaignTemplate(
            name="Beginner Campaign",
            description="A simple campaign to introduce new players",
            setting="Forgotten Realms",
            difficulty=DifficultyLevel.CASUAL,
        ),
    ]


__all__ = [
    "COMMON_SETTINGS",
    "SuggestionType",
    "SuggestionPriority",
    "Suggestion",
    "CampaignTemplate",
    "generate_campaign_suggestions",
    "get_creation_suggestions",
]
