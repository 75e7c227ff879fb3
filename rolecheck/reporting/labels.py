"""Verdict label sets.

Each label style maps the three verdicts to the strings written into the
report. The labels are what operators paste back into their spreadsheet.
"""

from typing import Dict, Iterable, List, Union

from rolecheck.config.models import LabelStyle
from rolecheck.domain.models import Verdict

LABEL_SETS: Dict[LabelStyle, Dict[Verdict, str]] = {
    LabelStyle.REVIEW: {
        Verdict.NO_CHANGE: "no change",
        Verdict.NEEDS_REVIEW: "REVIEW",
        Verdict.ERROR: "ERROR, REVIEW",
    },
    LabelStyle.NEW_ROLE: {
        Verdict.NO_CHANGE: "",
        Verdict.NEEDS_REVIEW: "new role",
        Verdict.ERROR: "ERROR, REVIEW",
    },
}


def label_for(verdict: Verdict, style: Union[LabelStyle, str] = LabelStyle.REVIEW) -> str:
    """Return the report label for a verdict.

    Args:
        verdict: Row verdict
        style: Label style (enum or its string value, e.g. "new-role")

    Raises:
        ValueError: If style is not a known label style
    """
    return LABEL_SETS[LabelStyle(style)][Verdict(verdict)]


def labels_for(verdicts: Iterable[Verdict], style: Union[LabelStyle, str] = LabelStyle.REVIEW) -> List[str]:
    """Map verdicts to labels, preserving order."""
    labels = LABEL_SETS[LabelStyle(style)]
    return [labels[Verdict(verdict)] for verdict in verdicts]
