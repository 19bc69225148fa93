"""
Per-curriculum error statistics.
"""

from typing import List, Optional, Sequence

from emerge_analytics.data.models import (
    ANALYZED_CURRICULA,
    AnalysisThresholds,
    Curriculum,
    CurriculumInsight,
    ErrorBankEntry,
)
from emerge_analytics.utils.safe_ops import safe_percentage


def _most_common_error(records: Sequence[ErrorBankEntry]) -> Optional[str]:
    ranked = sorted(records, key=lambda record: record.occurrence_count, reverse=True)
    return (ranked[0].error_pattern or None) if ranked else None


def _least_effective_error(
    records: Sequence[ErrorBankEntry], min_occurrences: int
) -> Optional[str]:
    # Rarely logged patterns are too noisy to call least effective
    eligible = [record for record in records if record.occurrence_count >= min_occurrences]
    ranked = sorted(eligible, key=lambda record: record.get_effectiveness_ratio())
    return (ranked[0].error_pattern or None) if ranked else None


def summarize_curriculum(
    curriculum: Curriculum,
    error_records: Sequence[ErrorBankEntry],
    thresholds: Optional[AnalysisThresholds] = None,
) -> CurriculumInsight:
    """
    Aggregate the error bank entries of one curriculum.

    Args:
        curriculum: Curriculum to summarize
        error_records: All error bank entries; other curricula are ignored
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        CurriculumInsight: Totals plus most common and least effective pattern
    """
    thresholds = thresholds or AnalysisThresholds()
    records = [record for record in error_records if record.curriculum == curriculum]
    if not records:
        return CurriculumInsight(curriculum=curriculum)

    total_errors = sum(record.occurrence_count for record in records)
    total_effective = sum(record.effectiveness_count for record in records)

    return CurriculumInsight(
        curriculum=curriculum,
        total_errors=total_errors,
        unique_patterns=len(records),
        avg_effectiveness=safe_percentage(total_effective, total_errors),
        most_common_error=_most_common_error(records),
        least_effective_error=_least_effective_error(
            records, thresholds.least_effective_min_occurrences
        ),
    )


def summarize_curricula(
    error_records: Sequence[ErrorBankEntry],
    thresholds: Optional[AnalysisThresholds] = None,
) -> List[CurriculumInsight]:
    """
    Summarize every analyzed curriculum that has error bank entries.

    Curricula come from the fixed analyzed list, not from the data, and are
    returned in that list's order. Curricula with no entries are left out.

    Args:
        error_records: Error bank entries
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        List[CurriculumInsight]: One insight per curriculum with data
    """
    insights = [
        summarize_curriculum(curriculum, error_records, thresholds)
        for curriculum in ANALYZED_CURRICULA
    ]
    return [
        insight
        for insight in insights
        if insight.total_errors > 0 or insight.unique_patterns > 0
    ]
