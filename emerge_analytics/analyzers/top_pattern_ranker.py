"""
Top-pattern ranking for the error-pattern analytics engine.

Ranks error bank entries by how often they occur and enriches each with its
correction effectiveness, reach across groups and students, and trend.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from emerge_analytics.analyzers.trend_classifier import classify_trend, sort_sessions_by_date
from emerge_analytics.data.models import (
    AnalysisThresholds,
    DashboardPattern,
    ErrorBankEntry,
    PatternInsight,
    Session,
)
from emerge_analytics.utils.safe_ops import safe_percentage

logger = logging.getLogger(__name__)


def select_most_frequent(
    error_records: Sequence[ErrorBankEntry], limit: int
) -> List[ErrorBankEntry]:
    """
    Pick the most frequently logged error bank entries.

    Entries that never occurred are dropped. Ties on occurrence count keep
    their storage order.

    Args:
        error_records: Error bank entries
        limit: Maximum number of entries to return

    Returns:
        List[ErrorBankEntry]: Entries sorted by occurrence count, descending
    """
    occurring = [record for record in error_records if record.occurrence_count > 0]
    ranked = sorted(occurring, key=lambda record: record.occurrence_count, reverse=True)
    return ranked[:limit]


def rank_top_patterns(
    error_records: Sequence[ErrorBankEntry],
    sessions: Sequence[Session],
    pattern_groups: Dict[str, Set[int]],
    pattern_students: Dict[str, Set[int]],
    thresholds: Optional[AnalysisThresholds] = None,
) -> List[PatternInsight]:
    """
    Build insights for the most frequently occurring error patterns.

    Args:
        error_records: Error bank entries
        sessions: Completed sessions, used for trend classification
        pattern_groups: Pattern to group ids index
        pattern_students: Pattern to student ids index
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        List[PatternInsight]: Insights in occurrence order, descending
    """
    thresholds = thresholds or AnalysisThresholds()
    top_records = select_most_frequent(error_records, thresholds.top_pattern_limit)

    # Sort once; every pattern's trend reads the same ordering
    ordered_sessions = sort_sessions_by_date(sessions)

    insights = []
    for record in top_records:
        pattern = record.error_pattern
        insights.append(
            PatternInsight(
                error_pattern=pattern,
                curriculum=record.curriculum,
                occurrence_count=record.occurrence_count,
                effectiveness_count=record.effectiveness_count,
                effectiveness_rate=safe_percentage(
                    record.effectiveness_count, record.occurrence_count
                ),
                groups_affected=len(pattern_groups.get(pattern, ())),
                students_affected=len(pattern_students.get(pattern, ())),
                correction_protocol=record.correction_protocol,
                trend=classify_trend(pattern, ordered_sessions, thresholds, presorted=True),
            )
        )

    logger.debug(f"Ranked {len(insights)} of {len(error_records)} error patterns")
    return insights


def summarize_top_patterns(
    error_records: Sequence[ErrorBankEntry], limit: int
) -> List[DashboardPattern]:
    """
    Build the compact top-pattern rows shown on the dashboard.

    Args:
        error_records: Error bank entries
        limit: Maximum number of rows

    Returns:
        List[DashboardPattern]: Rows in occurrence order, descending
    """
    return [
        DashboardPattern(
            pattern=record.error_pattern,
            count=record.occurrence_count,
            effectiveness=safe_percentage(record.effectiveness_count, record.occurrence_count),
        )
        for record in select_most_frequent(error_records, limit)
    ]


def overall_effectiveness(error_records: Sequence[ErrorBankEntry]) -> int:
    """
    Percentage of all logged corrections that worked, across every entry.

    Args:
        error_records: Error bank entries

    Returns:
        int: Whole-number percentage, 0 when nothing was logged
    """
    total_occurrences = sum(record.occurrence_count for record in error_records)
    total_effective = sum(record.effectiveness_count for record in error_records)
    return safe_percentage(total_effective, total_occurrences)
