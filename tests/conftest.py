"""
Pytest configuration and fixtures for campaign-rules tests.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
import pytest

# Add src directory to Python path to allow importing campaign_rules
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from campaign_rules.config import ENV_PREFIX, CampaignRulesConfig, reset_config
from campaign_rules.models import Campaign, CampaignInfo, CampaignStatus


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test against the default configuration."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def config() -> CampaignRulesConfig:
    return CampaignRulesConfig()


@pytest.fixture
def make_campaign():
    """Factory for campaigns with sensible, healthy defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        name: str | None = None,
        *,
        info: dict | None = None,
        **overrides,
    ) -> Campaign:
        n = next(counter)
        info_data = {
            "total_sessions": 4,
            "total_characters": 4,
            "total_npcs": 3,
            "total_quests": 2,
            "completed_quests": 1,
        }
        info_data.update(info or {})
        data = {
            "id": f"camp{n:04d}",
            "name": name or f"Campaign {n}",
            "description": "A campaign for testing",
            "setting": "Forgotten Realms",
            "dm_notes": "",
            "current_session": 4,
            "is_active": True,
            "status": CampaignStatus.ACTIVE,
            "player_count": 4,
            "active_characters": 4,
            "average_level": 3,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 2, 20, tzinfo=timezone.utc),
            "last_session_date": datetime(2024, 2, 20, tzinfo=timezone.utc),
            "info": CampaignInfo(**info_data),
        }
        data.update(overrides)
        return Campaign(**data)

    return _make
