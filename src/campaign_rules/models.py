"""
Data models for campaign records.

Field names are snake_case in Python. The backend speaks camelCase
(``dmNotes``, ``isActive``, ...), so every model accepts either spelling
and can emit the camelCase one with ``model_dump(by_alias=True)``.
Structural invariants are enforced here, at decode time; the user-facing
field rules (name length, required text, player range) live in
:mod:`campaign_rules.validation`.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from shortuuid import random

from .clock import as_utc, resolve_now, utc_now
from .config import get_config


class CampaignModel(BaseModel):
    """Base model sharing the camelCase wire aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CampaignStatus(str, Enum):
    """Workflow status of a campaign."""
    PLANNING = "Planning"
    ACTIVE = "Active"
    ON_HOLD = "OnHold"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


class DifficultyLevel(str, Enum):
    """Difficulty level used for encounter balancing."""
    CASUAL = "Casual"
    NORMAL = "Normal"
    HARD = "Hard"
    DEADLY = "Deadly"


class CampaignInfo(CampaignModel):
    """Statistical snapshot of a campaign's content."""
    total_sessions: int = Field(default=0, ge=0)
    total_characters: int = Field(default=0, ge=0)
    total_npcs: int = Field(default=0, ge=0)
    total_locations: int = Field(default=0, ge=0)
    total_quests: int = Field(default=0, ge=0)
    completed_quests: int = Field(default=0, ge=0)
    total_encounters: int = Field(default=0, ge=0)
    difficulty_level: DifficultyLevel = DifficultyLevel.NORMAL

    @model_validator(mode="after")
    def _check_quests(self) -> "CampaignInfo":
        if self.completed_quests > self.total_quests:
            raise ValueError(
                f"completed_quests ({self.completed_quests}) cannot exceed "
                f"total_quests ({self.total_quests})"
            )
        return self


class Campaign(CampaignModel):
    """A tabletop campaign record with its lifecycle and play statistics."""
    id: str = Field(default_factory=lambda: random(length=8))
    name: str
    description: str
    setting: str
    dm_notes: str = ""  # Private DM notes
    current_session: int = Field(default=0, ge=0)
    is_active: bool = True
    info: CampaignInfo = Field(default_factory=CampaignInfo)
    status: CampaignStatus = CampaignStatus.PLANNING
    player_count: int = Field(default=0, ge=0)
    active_characters: int = Field(default=0, ge=0)
    average_level: float = Field(default=0.0, ge=0, le=20)  # 0 means unset
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    last_session_date: datetime | None = None

    @field_validator("dm_notes", mode="before")
    @classmethod
    def _notes_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("created_at", "updated_at", "last_session_date")
    @classmethod
    def _to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Campaign":
        if 0 < self.average_level < 1:
            raise ValueError("average_level must be 0 (unset) or between 1 and 20")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be earlier than created_at")
        return self

    def to_summary(self) -> "CampaignSummary":
        """Return the read-only list projection of this campaign."""
        return CampaignSummary.from_campaign(self)


class CampaignSummary(CampaignModel):
    """Read-only projection of a Campaign for list views.

    Every field mirrors the Campaign field of the same name, so a summary
    can always be rebuilt from the full record.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    status: CampaignStatus
    current_session: int
    active_characters: int
    average_level: float
    last_session_date: datetime | None = None
    created_at: datetime
    is_active: bool

    @classmethod
    def from_campaign(cls, campaign: Campaign) -> "CampaignSummary":
        return cls(**{name: getattr(campaign, name) for name in cls.model_fields})


class AppSettings(CampaignModel):
    """Process-wide preferences, owned by the backend."""
    current_campaign_id: str | None = None
    recent_campaigns: list[str] = Field(default_factory=list)
    auto_backup: bool = True
    backup_frequency_hours: int = Field(default=24, ge=0)
    theme: str = "dark"
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def _check_backup(self) -> "AppSettings":
        if self.auto_backup and self.backup_frequency_hours <= 0:
            raise ValueError("backup_frequency_hours must be positive when auto_backup is enabled")
        return self

    def set_current_campaign(
        self,
        campaign_id: str,
        now: datetime | None = None,
        limit: int | None = None,
    ) -> "AppSettings":
        """Make a campaign current and move it to the front of the recent list.

        Args:
            campaign_id: Id of the campaign being opened.
            now: Instant to stamp as ``updated_at``. Defaults to the real clock.
            limit: Maximum length of the recent list. Defaults to the
                configured ``recent_campaigns_limit``.

        Returns:
            A new AppSettings; this instance is left untouched.
        """
        if limit is None:
            limit = get_config().recent_campaigns_limit
        recent = [campaign_id] + [cid for cid in self.recent_campaigns if cid != campaign_id]
        return self.model_copy(update={
            "current_campaign_id": campaign_id,
            "recent_campaigns": recent[:limit],
            "updated_at": resolve_now(now),
        })

    def clear_current_campaign(self, now: datetime | None = None) -> "AppSettings":
        """Return a copy with no current campaign."""
        return self.model_copy(update={
            "current_campaign_id": None,
            "updated_at": resolve_now(now),
        })


# Request types

class CreateCampaignRequest(CampaignModel):
    """Fields supplied when creating a campaign.

    Everything is optional at the type level so that a half-filled form can
    still be validated and every missing field reported.
    """
    name: str | None = None
    description: str | None = None
    setting: str | None = None
    dm_notes: str | None = None
    difficulty_level: DifficultyLevel = DifficultyLevel.NORMAL
    player_count: int | None = None

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _difficulty_default(cls, v: Any) -> Any:
        return DifficultyLevel.NORMAL if v is None else v


class UpdateCampaignRequest(CampaignModel):
    """Partial update. Only fields supplied with a value are applied."""
    name: str | None = None
    description: str | None = None
    setting: str | None = None
    dm_notes: str | None = None
    difficulty_level: DifficultyLevel | None = None
    player_count: int | None = None
    is_active: bool | None = None

    def present_fields(self) -> dict[str, Any]:
        """Return the fields that were supplied with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


__all__ = [
    "CampaignModel",
    "CampaignStatus",
    "DifficultyLevel",
    "CampaignInfo",
    "Campaign",
    "CampaignSummary",
    "AppSettings",
    "CreateCampaignRequest",
    "UpdateCampaignRequest",
]
