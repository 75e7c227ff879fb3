"""Role matching engine for flagging profiles that need review.

This module provides:
- RoleMatcher: compares a ProfileRecord with an expected company
- MatchResult: verdict plus the roles that drove it
"""

from .engine import RoleMatcher
from .models import MatchResult

__all__ = [
    "RoleMatcher",
    "MatchResult",
]
