"""
Student error profiles.

Aggregates every tracking record of a student into one profile of the
patterns the student struggles with and how often corrections worked.
"""

import logging
from typing import List, Optional, Sequence

from emerge_analytics.analyzers.pattern_index import (
    build_group_lookup,
    build_student_lookup,
    group_trackings_by_student,
    resolve_group_name,
)
from emerge_analytics.data.models import (
    AnalysisThresholds,
    Group,
    Student,
    StudentErrorProfile,
    StudentSessionTracking,
)
from emerge_analytics.utils.safe_ops import safe_percentage

logger = logging.getLogger(__name__)


def build_student_profiles(
    trackings: Sequence[StudentSessionTracking],
    students: Sequence[Student],
    groups: Sequence[Group],
    thresholds: Optional[AnalysisThresholds] = None,
) -> List[StudentErrorProfile]:
    """
    Build error profiles for the students with the most logged errors.

    total_errors counts every exhibited error, repeats included, while
    error_patterns lists each distinct pattern once in first-seen order.
    Tracking records for students missing from the roster are skipped.

    Args:
        trackings: Student session tracking records
        students: Student roster
        groups: Groups, used for display names
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        List[StudentErrorProfile]: Profiles sorted by total errors, descending
    """
    thresholds = thresholds or AnalysisThresholds()
    student_lookup = build_student_lookup(students)
    group_lookup = build_group_lookup(groups)

    profiles = []
    for student_id, records in group_trackings_by_student(trackings).items():
        student = student_lookup.get(student_id)
        if student is None:
            logger.warning(
                f"Skipping profile for unknown student {student_id} "
                f"({len(records)} tracking record(s))"
            )
            continue

        patterns: List[str] = []
        total_errors = 0
        outcomes: List[bool] = []
        for record in records:
            for pattern in record.errors_exhibited:
                if pattern not in patterns:
                    patterns.append(pattern)
                total_errors += 1
            outcomes.extend(record.get_correction_outcomes())

        profiles.append(
            StudentErrorProfile(
                student_id=student_id,
                student_name=student.name,
                group_id=student.group_id,
                group_name=resolve_group_name(group_lookup, student.group_id),
                error_patterns=patterns,
                total_errors=total_errors,
                correction_success_rate=safe_percentage(sum(outcomes), len(outcomes)),
            )
        )

    profiles.sort(key=lambda profile: profile.total_errors, reverse=True)
    return profiles[: thresholds.student_profile_limit]
