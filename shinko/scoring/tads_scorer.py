# shinko/scoring/tads_scorer.py
"""
T.A.D.S. Validation Scorer
--------------------------
Cardinality score over the five validation flags.

Formula:
    T.A.D.S. = 2 × count(true flags)      range [0, 10], always even

Flags (fixed order): scalability, integration, pain_point, recurring,
mvp_speed. Every flag weighs the same; a missing flag counts as false.
"""
from typing import Any, Mapping, Optional, Union

from shinko.models.opportunity import TADS_FLAGS, TADS_FLAG_ALIASES, TadsCriteria

POINTS_PER_FLAG = 2
MAX_TADS_SCORE = POINTS_PER_FLAG * len(TADS_FLAGS)

TadsFlags = Union[TadsCriteria, Mapping[str, Any], None]


def _flag_is_set(flags: Mapping[str, Any], name: str) -> bool:
    if name in flags:
        return bool(flags[name])
    return bool(flags.get(TADS_FLAG_ALIASES[name], False))


def count_true_flags(flags: TadsFlags) -> int:
    """Number of set flags among the five known ones (0-5)."""
    if flags is None:
        return 0
    if isinstance(flags, TadsCriteria):
        return flags.true_count()
    return sum(1 for name in TADS_FLAGS if _flag_is_set(flags, name))


def compute_tads_score(flags: Optional[TadsFlags]) -> int:
    """
    Compute the T.A.D.S. score.

    Args:
        flags: A TadsCriteria, a mapping keyed by flag name (snake_case or
               the camelCase painPoint / mvpSpeed), or None.

    Returns:
        2 × number of true flags, in [0, 10].
    """
    return POINTS_PER_FLAG * count_true_flags(flags)
