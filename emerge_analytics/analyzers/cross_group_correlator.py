"""
Cross-group correlation of error patterns.

Finds error patterns that recur in several intervention groups, the
candidates for school-wide intervention.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from emerge_analytics.analyzers.pattern_index import (
    build_group_lookup,
    build_pattern_group_counts,
    resolve_group_name,
)
from emerge_analytics.data.models import (
    AnalysisThresholds,
    CrossGroupPattern,
    ErrorBankEntry,
    Group,
    GroupOccurrence,
    Session,
)

logger = logging.getLogger(__name__)

DEFAULT_INTERVENTION = "Review error pattern and develop targeted intervention strategy"


def find_correction_protocol(pattern: str, error_records: Iterable[ErrorBankEntry]) -> str:
    """
    Get the correction protocol of the first error bank entry for a pattern.

    Args:
        pattern: Error pattern name
        error_records: Error bank entries in storage order

    Returns:
        str: The protocol, or a generic suggestion when none is recorded
    """
    for record in error_records:
        if record.error_pattern == pattern:
            return record.correction_protocol or DEFAULT_INTERVENTION
    return DEFAULT_INTERVENTION


def find_cross_group_patterns(
    sessions: Sequence[Session],
    groups: Sequence[Group],
    error_records: Sequence[ErrorBankEntry],
    thresholds: Optional[AnalysisThresholds] = None,
) -> List[CrossGroupPattern]:
    """
    Find error patterns logged in at least two different groups.

    Every logged occurrence counts, including repeats within one session.
    Groups within a pattern are ordered by their occurrence count, and
    patterns by their total, both descending with ties in first-seen order.

    Args:
        sessions: Completed sessions
        groups: Groups, used for display names
        error_records: Error bank entries, used for the suggested intervention
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        List[CrossGroupPattern]: Most widespread patterns first
    """
    thresholds = thresholds or AnalysisThresholds()
    group_lookup = build_group_lookup(groups)

    cross_patterns = []
    for pattern, group_counts in build_pattern_group_counts(sessions).items():
        if len(group_counts) < thresholds.cross_group_min_groups:
            continue

        occurrences = sorted(
            (
                GroupOccurrence(
                    group_id=group_id,
                    group_name=resolve_group_name(group_lookup, group_id),
                    occurrences=count,
                )
                for group_id, count in group_counts.items()
            ),
            key=lambda occurrence: occurrence.occurrences,
            reverse=True,
        )
        cross_patterns.append(
            CrossGroupPattern(
                pattern=pattern,
                groups=occurrences,
                total_occurrences=sum(o.occurrences for o in occurrences),
                suggested_intervention=find_correction_protocol(pattern, error_records),
            )
        )

    cross_patterns.sort(key=lambda cross: cross.total_occurrences, reverse=True)
    logger.debug(f"Found {len(cross_patterns)} cross-group patterns")
    return cross_patterns[: thresholds.cross_group_limit]


def count_cross_group_patterns(
    pattern_groups: Dict[str, Set[int]],
    thresholds: Optional[AnalysisThresholds] = None,
) -> int:
    """
    Count patterns seen in at least the minimum number of groups.

    Args:
        pattern_groups: Pattern to group ids index
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        int: Number of cross-group patterns, without any result limit
    """
    thresholds = thresholds or AnalysisThresholds()
    return sum(
        1 for group_ids in pattern_groups.values()
        if len(group_ids) >= thresholds.cross_group_min_groups
    )
