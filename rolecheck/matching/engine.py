"""Role matching engine for deciding whether a profile needs review.

This module implements the verdict algorithm that:
1. Selects the roles that may satisfy the expected company (per MatchPolicy)
2. Compares normalized company keys
3. Returns a MatchResult with the verdict and a reason for logging
"""

import logging
from typing import Optional

from rolecheck.config.models import MatchingConfig, MatchPolicy
from rolecheck.domain.models import ProfileRecord, Verdict
from rolecheck.normalization.text import normalize_company

from .models import MatchResult

logger = logging.getLogger(__name__)

REASON_MATCHED = "matched_current_role"
REASON_NO_CURRENT_ROLES = "no_current_roles"
REASON_NO_MATCH = "no_matching_current_role"
REASON_MISSING_EXPECTED = "missing_expected_company"
REASON_MOST_RECENT_ENDED = "most_recent_role_ended"
REASON_MOST_RECENT_DIFFERS = "most_recent_company_differs"


class RoleMatcher:
    """Evaluates a scraped profile against the company recorded in the roster.

    Policies:
    - any-current: NO_CHANGE when at least one role without an end date is at
      the expected company. People often hold concurrent roles (consulting,
      board seats) and the roster may track any of them.
    - most-recent: NO_CHANGE only when the first listed role is current and at
      the expected company.
    """

    def __init__(
        self,
        matching_config: Optional[MatchingConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RoleMatcher.

        Args:
            matching_config: Matching rules (defaults to any-current)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.matching_config = matching_config or MatchingConfig()
        self.policy = MatchPolicy(self.matching_config.policy)
        self.logger = logger_instance or logger

    def evaluate(self, profile: ProfileRecord, expected_company: str) -> MatchResult:
        """Compare a profile's current roles with the expected company.

        Args:
            profile: Scraped profile
            expected_company: Company recorded in the roster row

        Returns:
            MatchResult with NO_CHANGE or NEEDS_REVIEW
        """
        expected_key = normalize_company(expected_company)
        current_roles = profile.current_roles()

        if not expected_key:
            result = MatchResult(
                verdict=Verdict.NEEDS_REVIEW,
                current_roles=current_roles,
                reason=REASON_MISSING_EXPECTED,
            )
        elif self.policy == MatchPolicy.MOST_RECENT:
            result = self._evaluate_most_recent(profile, expected_key, current_roles)
        else:
            result = self._evaluate_any_current(expected_key, current_roles)

        self.logger.debug(
            f"Match decision: {result.verdict.value}",
            extra={
                "event": "matching.profile.evaluated",
                "policy": self.policy.value,
                "verdict": result.verdict.value,
                "reason": result.reason,
                "current_role_count": len(current_roles),
            },
        )

        return result

    @staticmethod
    def _evaluate_any_current(expected_key, current_roles) -> MatchResult:
        if not current_roles:
            return MatchResult(
                verdict=Verdict.NEEDS_REVIEW,
                expected_key=expected_key,
                reason=REASON_NO_CURRENT_ROLES,
            )

        for role in current_roles:
            if normalize_company(role.company) == expected_key:
                return MatchResult(
                    verdict=Verdict.NO_CHANGE,
                    expected_key=expected_key,
                    current_roles=current_roles,
                    matched_role=role,
                    reason=REASON_MATCHED,
                )

        return MatchResult(
            verdict=Verdict.NEEDS_REVIEW,
            expected_key=expected_key,
            current_roles=current_roles,
            reason=REASON_NO_MATCH,
        )

    @staticmethod
    def _evaluate_most_recent(profile, expected_key, current_roles) -> MatchResult:
        if not profile.experience:
            return MatchResult(
                verdict=Verdict.NEEDS_REVIEW,
                expected_key=expected_key,
                reason=REASON_NO_CURRENT_ROLES,
            )

        latest = profile.experience[0]
        if not latest.is_current:
            reason = REASON_MOST_RECENT_ENDED
        elif normalize_company(latest.company) != expected_key:
            reason = REASON_MOST_RECENT_DIFFERS
        else:
            return MatchResult(
                verdict=Verdict.NO_CHANGE,
                expected_key=expected_key,
                current_roles=current_roles,
                matched_role=latest,
                reason=REASON_MATCHED,
            )

        return MatchResult(
            verdict=Verdict.NEEDS_REVIEW,
            expected_key=expected_key,
            current_roles=current_roles,
            reason=reason,
        )
