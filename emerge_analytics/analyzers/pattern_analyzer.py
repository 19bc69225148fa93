"""
Cross-group error-pattern analyzer.

This module provides the PatternAnalyzer class, which loads a snapshot of
the intervention data and composes the pattern indexes, ranker, curriculum
summarizer, cross-group correlator, student profiler and recommendation
engine into a single analysis report.
"""

import logging
from typing import Optional

from emerge_analytics.analyzers.cross_group_correlator import (
    count_cross_group_patterns,
    find_cross_group_patterns,
)
from emerge_analytics.analyzers.curriculum_summarizer import summarize_curricula
from emerge_analytics.analyzers.pattern_index import (
    build_pattern_group_index,
    build_pattern_student_index,
    group_sessions_by_group,
)
from emerge_analytics.analyzers.recommendation_engine import generate_recommendations
from emerge_analytics.analyzers.student_profiler import build_student_profiles
from emerge_analytics.analyzers.top_pattern_ranker import (
    overall_effectiveness,
    rank_top_patterns,
    summarize_top_patterns,
)
from emerge_analytics.data.data_repository import DataRepository
from emerge_analytics.data.models import (
    AnalysisReport,
    AnalysisSnapshot,
    AnalysisSummary,
    AnalysisThresholds,
    PatternSummary,
    fallback_group_name,
)

# Collections the dashboard summary needs
SUMMARY_COLLECTIONS = ["error_records", "completed_sessions", "groups"]


class PatternAnalyzer:
    """
    Analyzer for error patterns across all intervention groups.

    Every call reads a fresh snapshot and builds its own indexes, so results
    always reflect the data at call time and nothing is shared between calls.
    A failed read aborts the call with the DataAccessError raised by the
    repository.
    """

    def __init__(
        self,
        data_repository: DataRepository,
        thresholds: Optional[AnalysisThresholds] = None,
    ):
        """
        Initialize the pattern analyzer.

        Args:
            data_repository: Data repository for accessing all entity repositories
            thresholds: Engine thresholds (defaults when omitted)
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._data_repo = data_repository
        self._thresholds = thresholds or AnalysisThresholds()

    @property
    def thresholds(self) -> AnalysisThresholds:
        """Thresholds this analyzer runs with."""
        return self._thresholds

    def analyze_patterns(self) -> AnalysisReport:
        """
        Run the full cross-group analysis.

        Returns:
            AnalysisReport: Summary, ranked insights and recommendations

        Raises:
            DataAccessError: If any collection cannot be read
        """
        snapshot = self._data_repo.load_snapshot()
        self._logger.info(
            f"Analyzing {len(snapshot.error_records)} error bank entries across "
            f"{len(snapshot.completed_sessions)} completed sessions"
        )
        return self.analyze_snapshot(snapshot)

    def analyze_snapshot(self, snapshot: AnalysisSnapshot) -> AnalysisReport:
        """
        Run the full analysis over an already loaded snapshot.

        Args:
            snapshot: Materialized collections

        Returns:
            AnalysisReport: Composed report
        """
        thresholds = self._thresholds
        summary = AnalysisSummary(
            total_groups=len(snapshot.groups),
            total_students=len(snapshot.students),
            total_errors=sum(record.occurrence_count for record in snapshot.error_records),
            avg_effectiveness=overall_effectiveness(snapshot.error_records),
            analyzed_sessions=len(snapshot.completed_sessions),
        )

        pattern_groups = build_pattern_group_index(snapshot.completed_sessions)
        pattern_students = build_pattern_student_index(snapshot.trackings)
        self._log_session_coverage(snapshot)

        top_patterns = rank_top_patterns(
            snapshot.error_records,
            snapshot.completed_sessions,
            pattern_groups,
            pattern_students,
            thresholds,
        )
        curriculum_insights = summarize_curricula(snapshot.error_records, thresholds)
        cross_group_patterns = find_cross_group_patterns(
            snapshot.completed_sessions,
            snapshot.groups,
            snapshot.error_records,
            thresholds,
        )
        student_profiles = build_student_profiles(
            snapshot.trackings, snapshot.students, snapshot.groups, thresholds
        )
        recommendations = generate_recommendations(
            top_patterns,
            cross_group_patterns,
            curriculum_insights,
            summary,
            thresholds,
        )

        self._logger.info(
            f"Analysis complete: {len(top_patterns)} top patterns, "
            f"{len(cross_group_patterns)} cross-group patterns, "
            f"{len(recommendations)} recommendations"
        )
        return AnalysisReport(
            summary=summary,
            top_error_patterns=top_patterns,
            curriculum_insights=curriculum_insights,
            cross_group_patterns=cross_group_patterns,
            student_profiles=student_profiles,
            recommendations=recommendations,
        )

    def get_pattern_summary(self) -> PatternSummary:
        """
        Compute the lightweight dashboard summary.

        Only error bank entries, completed sessions and groups are read, and
        nothing from a full report is reused.

        Returns:
            PatternSummary: Top patterns, cross-group count, overall effectiveness

        Raises:
            DataAccessError: If any collection cannot be read
        """
        snapshot = self._data_repo.load_snapshot(SUMMARY_COLLECTIONS)
        pattern_groups = build_pattern_group_index(snapshot.completed_sessions)

        return PatternSummary(
            top_patterns=summarize_top_patterns(
                snapshot.error_records, self._thresholds.dashboard_pattern_limit
            ),
            cross_group_count=count_cross_group_patterns(pattern_groups, self._thresholds),
            avg_effectiveness=overall_effectiveness(snapshot.error_records),
        )

    def _log_session_coverage(self, snapshot: AnalysisSnapshot) -> None:
        """Log completed sessions per group and flag groups with no group record."""
        known_groups = {group.id for group in snapshot.groups}
        for group_id, sessions in group_sessions_by_group(snapshot.completed_sessions).items():
            self._logger.debug(f"Group {group_id}: {len(sessions)} completed sessions")
            if group_id not in known_groups:
                self._logger.warning(
                    f"Completed sessions reference unknown group {group_id}; "
                    f"reporting it as '{fallback_group_name(group_id)}'"
                )
