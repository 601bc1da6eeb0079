"""
Tests for create and update request validation.
"""

import pytest

from campaign_rules.config import CampaignRulesConfig
from campaign_rules.models import CreateCampaignRequest, DifficultyLevel, UpdateCampaignRequest
from campaign_rules.validation import (
    ValidationResult,
    check_create_data,
    check_update_data,
    validate_create_data,
    validate_update_data,
)


def valid_create(**overrides) -> dict:
    data = {
        "name": "Curse of Strahd",
        "description": "Gothic horror in Barovia",
        "setting": "Ravenloft",
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# validate_create_data
# ---------------------------------------------------------------------------

class TestValidateCreateData:
    """Tests for validate_create_data."""

    def test_valid_request(self):
        """A complete request has no errors."""
        assert validate_create_data(valid_create()) == []

    def test_accepts_model(self):
        """A CreateCampaignRequest instance is accepted."""
        request = CreateCampaignRequest(**valid_create(player_count=5))
        assert validate_create_data(request) == []

    def test_accepts_camel_case_mapping(self):
        """camelCase mappings are accepted."""
        assert validate_create_data(valid_create(playerCount=5, dmNotes="secret")) == []

    def test_null_difficulty_uses_default(self):
        """A difficulty not yet chosen validates and falls back to Normal."""
        data = valid_create(difficultyLevel=None)
        assert validate_create_data(data) == []
        assert CreateCampaignRequest.model_validate(data).difficulty_level == DifficultyLevel.NORMAL

    def test_partial_form_reports_messages(self):
        """A half-filled form yields messages instead of raising."""
        errors = validate_create_data({"name": "x", "difficultyLevel": None, "playerCount": None})
        assert errors == ["Description is required", "Setting is required"]

    def test_name_too_long(self):
        """A 101-character name yields exactly one length error."""
        errors = validate_create_data(valid_create(name="a" * 101))
        assert errors == ["Campaign name cannot exceed 100 characters"]

    def test_name_at_limit(self):
        """A 100-character name is fine."""
        assert validate_create_data(valid_create(name="a" * 100)) == []

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_name_required(self, name):
        """Missing or blank names are rejected once."""
        errors = validate_create_data(valid_create(name=name))
        assert errors == ["Campaign name is required"]

    def test_description_empty(self):
        """An empty description yields exactly one required error."""
        errors = validate_create_data(valid_create(description=""))
        assert errors == ["Description is required"]

    def test_description_too_long(self):
        """Descriptions over 500 characters are rejected."""
        errors = validate_create_data(valid_create(description="d" * 501))
        assert errors == ["Description cannot exceed 500 characters"]

    def test_setting_required(self):
        """A blank setting is rejected."""
        assert validate_create_data(valid_create(setting="  ")) == ["Setting is required"]

    @pytest.mark.parametrize("count", [0, 11, -3])
    def test_player_count_out_of_range(self, count):
        """Player counts outside 1-10 yield exactly one error."""
        errors = validate_create_data(valid_create(player_count=count))
        assert errors == ["Player count must be between 1 and 10"]

    @pytest.mark.parametrize("count", [1, 5, 10])
    def test_player_count_in_range(self, count):
        """Player counts within 1-10 are fine."""
        assert validate_create_data(valid_create(player_count=count)) == []

    def test_player_count_optional(self):
        """Player count may be left out."""
        assert validate_create_data(valid_create()) == []

    def test_all_rules_reported(self):
        """Every violated rule is reported, not only the first."""
        errors = validate_create_data({"player_count": 42})
        assert errors == [
            "Campaign name is required",
            "Description is required",
            "Setting is required",
            "Player count must be between 1 and 10",
        ]

    def test_custom_limits(self):
        """Limits come from the configuration."""
        config = CampaignRulesConfig(max_name_length=5, max_player_count=6)
        errors = validate_create_data(valid_create(name="Strahd", player_count=7), config)
        assert errors == [
            "Campaign name cannot exceed 5 characters",
            "Player count must be between 1 and 6",
        ]


# ---------------------------------------------------------------------------
# validate_update_data
# ---------------------------------------------------------------------------

class TestValidateUpdateData:
    """Tests for validate_update_data."""

    def test_empty_patch(self):
        """A patch with nothing in it is valid."""
        assert validate_update_data({}) == []

    def test_absent_fields_not_validated(self):
        """Only supplied fields are checked."""
        assert validate_update_data(UpdateCampaignRequest(is_active=False)) == []

    def test_blank_name_rejected(self):
        """A name supplied as blank is rejected."""
        assert validate_update_data({"name": "  "}) == ["Campaign name cannot be empty"]

    def test_long_name_rejected(self):
        """A name over the limit is rejected."""
        errors = validate_update_data({"name": "a" * 101})
        assert errors == ["Campaign name cannot exceed 100 characters"]

    def test_null_name_is_absent(self):
        """A null name is treated as not supplied."""
        assert validate_update_data({"name": None}) == []

    def test_blank_description_rejected(self):
        """A description supplied as blank is rejected."""
        assert validate_update_data({"description": ""}) == ["Description cannot be empty"]

    def test_long_description_rejected(self):
        """A description over the limit is rejected."""
        errors = validate_update_data({"description": "d" * 501})
        assert errors == ["Description cannot exceed 500 characters"]

    def test_blank_setting_rejected(self):
        """A setting supplied as blank is rejected."""
        assert validate_update_data({"setting": ""}) == ["Setting cannot be empty"]

    def test_zero_player_count_rejected(self):
        """A player count of 0 is out of range in updates too."""
        errors = validate_update_data({"playerCount": 0})
        assert errors == ["Player count must be between 1 and 10"]

    def test_player_count_in_range(self):
        """A player count within range is fine."""
        assert validate_update_data({"player_count": 6}) == []

    def test_multiple_errors(self):
        """All violated rules are reported."""
        errors = validate_update_data({"name": "", "player_count": 11})
        assert len(errors) == 2


# ---------------------------------------------------------------------------
# ValidationResult wrappers
# ---------------------------------------------------------------------------

class TestValidationResult:
    """Tests for the check_* wrappers."""

    def test_valid(self):
        """A valid request gives is_valid True."""
        result = check_create_data(valid_create())
        assert isinstance(result, ValidationResult)
        assert result.is_valid
        assert result.errors == []

    def test_invalid(self):
        """An invalid patch gives is_valid False with the errors."""
        result = check_update_data({"name": ""})
        assert not result.is_valid
        assert result.errors == ["Campaign name cannot be empty"]
