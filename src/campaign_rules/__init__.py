"""
Campaign Rules - validation, derived metrics and suggestions for tabletop campaign records.
"""

from .models import *
from .campaign import *
from .validation import *
from .lifecycle import *
from .aggregation import *
from .suggestions import *
from .config import CampaignRulesConfig, get_config, load_config, reset_config
from .errors import CampaignRulesError, CampaignValidationError, CampaignLockedError

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("campaign-rules")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
