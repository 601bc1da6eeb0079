"""
Configuration for the campaign rules layer.

The heuristics used by the health check, the suggestion engine and the
duration estimate are tunables, not laws. They live in a single pydantic
model so that they can be overridden from the environment (or a ``.env``
file) without touching the rules themselves.
"""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger("campaign-rules")

ENV_PREFIX = "CAMPAIGN_RULES_"


class CampaignRulesConfig(BaseModel):
    """Tunable thresholds for campaign validation, health and forecasting."""

    # Health check
    stale_session_days: int = Field(
        default=30,
        ge=1,
        description="Whole days since the last session after which a campaign is flagged"
    )

    # Collections
    recent_update_days: int = Field(
        default=7,
        ge=1,
        description="Window, in days, for the recently-updated view"
    )
    max_active_campaigns: int = Field(
        default=3,
        ge=1,
        description="Active campaign count above which archiving is suggested"
    )
    recent_campaigns_limit: int = Field(
        default=5,
        ge=1,
        description="How many campaign ids AppSettings keeps in its recent list"
    )

    # Forecasting
    estimated_campaign_sessions: int = Field(
        default=25,
        ge=1,
        description="Assumed total length of a campaign, in sessions"
    )

    # Validation limits
    min_player_count: int = Field(default=1, ge=1)
    max_player_count: int = Field(default=10, ge=1)
    max_name_length: int = Field(default=100, ge=1)
    max_description_length: int = Field(default=500, ge=1)

    @model_validator(mode="after")
    def _check_player_range(self) -> "CampaignRulesConfig":
        if self.min_player_count > self.max_player_count:
            raise ValueError("min_player_count cannot exceed max_player_count")
        return self


def _read_env_file(env_file: str | Path | None) -> dict[str, str]:
    """Read ``CAMPAIGN_RULES_*`` entries from a dotenv file without exporting them."""
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    if not path or not Path(path).is_file():
        logger.debug("No .env file found, reading configuration from the environment only")
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key.startswith(ENV_PREFIX) and value is not None
    }


def load_config(env_file: str | Path | None = None) -> CampaignRulesConfig:
    """Build a configuration from ``CAMPAIGN_RULES_*`` environment variables.

    Args:
        env_file: Optional path to a dotenv file. When omitted, python-dotenv
            searches for a ``.env`` file from the current directory upwards.
            Variables already present in the environment win. The file is
            only read; nothing is written to ``os.environ``.

    Returns:
        The validated configuration. Unset variables keep their defaults.

    Raises:
        pydantic.ValidationError: If a variable holds an out-of-range or
            non-numeric value.
    """
    file_values = _read_env_file(env_file)

    overrides: dict[str, str] = {}
    for name in CampaignRulesConfig.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        value = os.getenv(key, file_values.get(key))
        if value is not None and value.strip():
            overrides[name] = value.strip()

    config = CampaignRulesConfig.model_validate(overrides)
    if overrides:
        logger.debug(f"⚙️ Campaign rules overrides: {sorted(overrides)}")
    return config


_config: CampaignRulesConfig | None = None


def get_config() -> CampaignRulesConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next access reloads it."""
    global _config
    _config = None


__all__ = [
    "CampaignRulesConfig",
    "ENV_PREFIX",
    "get_config",
    "load_config",
    "reset_config",
]
