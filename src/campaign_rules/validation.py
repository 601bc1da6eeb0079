"""
Field-level validation of campaign create and update requests.

Validators never raise on well-typed input. Every rule is evaluated and
each violated rule contributes one user-facing message; an empty list
means the request is valid.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import CampaignRulesConfig, get_config
from .models import CreateCampaignRequest, UpdateCampaignRequest


@dataclass
class ValidationResult:
    """Validation outcome with a convenience validity flag."""
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def coerce_create_request(data: CreateCampaignRequest | Mapping[str, Any]) -> CreateCampaignRequest:
    """Accept a request model or a camelCase/snake_case mapping."""
    if isinstance(data, CreateCampaignRequest):
        return data
    return CreateCampaignRequest.model_validate(data)


def coerce_update_request(data: UpdateCampaignRequest | Mapping[str, Any]) -> UpdateCampaignRequest:
    """Accept a patch model or a camelCase/snake_case mapping."""
    if isinstance(data, UpdateCampaignRequest):
        return data
    return UpdateCampaignRequest.model_validate(data)


def _check_name(name: str, errors: list[str], config: CampaignRulesConfig, blank_message: str) -> None:
    if not name.strip():
        errors.append(blank_message)
    elif len(name) > config.max_name_length:
        errors.append(f"Campaign name cannot exceed {config.max_name_length} characters")


def _check_description(description: str, errors: list[str], config: CampaignRulesConfig, blank_message: str) -> None:
    if not description.strip():
        errors.append(blank_message)
    elif len(description) > config.max_description_length:
        errors.append(f"Description cannot exceed {config.max_description_length} characters")


def _check_player_count(player_count: int, errors: list[str], config: CampaignRulesConfig) -> None:
    if not config.min_player_count <= player_count <= config.max_player_count:
        errors.append(
            f"Player count must be between {config.min_player_count} and {config.max_player_count}"
        )


def validate_create_data(
    data: CreateCampaignRequest | Mapping[str, Any],
    config: CampaignRulesConfig | None = None,
) -> list[str]:
    """Validate a (possibly incomplete) campaign creation request.

    Name, description and setting are required; name and description are
    length-limited; player count, when given, must be in range.
    """
    config = config or get_config()
    request = coerce_create_request(data)
    errors: list[str] = []

    _check_name(request.name or "", errors, config, "Campaign name is required")
    _check_description(request.description or "", errors, config, "Description is required")

    if not (request.setting or "").strip():
        errors.append("Setting is required")

    if request.player_count is not None:
        _check_player_count(request.player_count, errors, config)

    return errors


def validate_update_data(
    data: UpdateCampaignRequest | Mapping[str, Any],
    config: CampaignRulesConfig | None = None,
) -> list[str]:
    """Validate a partial update.

    Only fields present in the patch are checked. A field supplied as an
    empty string is present, so a blank name, description or setting is
    rejected, while leaving it out is fine. A player count of 0 is out of
    range like any other.
    """
    config = config or get_config()
    patch = coerce_update_request(data)
    present = patch.present_fields()
    errors: list[str] = []

    if "name" in present:
        _check_name(present["name"], errors, config, "Campaign name cannot be empty")

    if "description" in present:
        _check_description(present["description"], errors, config, "Description cannot be empty")

    if "setting" in present and not present["setting"].strip():
        errors.append("Setting cannot be empty")

    if "player_count" in present:
        _check_player_count(present["player_count"], errors, config)

    return errors


def check_create_data(
    data: CreateCampaignRequest | Mapping[str, Any],
    config: CampaignRulesConfig | None = None,
) -> ValidationResult:
    return ValidationResult(errors=validate_create_data(data, config))


def check_update_data(
    data: UpdateCampaignRequest | Mapping[str, Any],
    config: CampaignRulesConfig | None = None,
) -> ValidationResult:
    return ValidationResult(errors=validate_update_data(data, config))


__all__ = [
    "ValidationResult",
    "coerce_create_request",
    "coerce_update_request",
    "validate_create_data",
    "validate_update_data",
    "check_create_data",
    "check_update_data",
]
