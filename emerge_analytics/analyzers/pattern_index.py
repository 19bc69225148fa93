"""
Aggregation indexes for the error-pattern analytics engine.

The storage layer has no query planner, so every join the engine needs
(pattern to groups, pattern to students, student to trackings, group to
sessions) is a hash-map index built here, fresh for each analysis call.
All functions are pure: they read their inputs and return new mappings.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Set

from emerge_analytics.data.models import (
    Group,
    Session,
    Student,
    StudentSessionTracking,
    fallback_group_name,
)


def build_pattern_group_index(sessions: Iterable[Session]) -> Dict[str, Set[int]]:
    """
    Map each error pattern to the groups whose sessions logged it.

    Args:
        sessions: Completed sessions

    Returns:
        Dict[str, Set[int]]: pattern -> group ids
    """
    index: Dict[str, Set[int]] = defaultdict(set)
    for session in sessions:
        for pattern in session.get_error_patterns():
            index[pattern].add(session.group_id)
    return dict(index)


def build_pattern_student_index(
    trackings: Iterable[StudentSessionTracking],
) -> Dict[str, Set[int]]:
    """
    Map each error pattern to the students who exhibited it.

    Args:
        trackings: Student session tracking records

    Returns:
        Dict[str, Set[int]]: pattern -> student ids
    """
    index: Dict[str, Set[int]] = defaultdict(set)
    for tracking in trackings:
        for pattern in tracking.errors_exhibited:
            index[pattern].add(tracking.student_id)
    return dict(index)


def build_pattern_group_counts(sessions: Iterable[Session]) -> Dict[str, Dict[int, int]]:
    """
    Count every logged occurrence of each pattern per group.

    Repeated errors within one session each count. Both levels keep
    first-seen insertion order.

    Args:
        sessions: Completed sessions

    Returns:
        Dict[str, Dict[int, int]]: pattern -> (group id -> occurrences)
    """
    counts: Dict[str, Dict[int, int]] = {}
    for session in sessions:
        for pattern in session.get_error_patterns():
            group_counts = counts.setdefault(pattern, {})
            group_counts[session.group_id] = group_counts.get(session.group_id, 0) + 1
    return counts


def group_trackings_by_student(
    trackings: Iterable[StudentSessionTracking],
) -> Dict[int, List[StudentSessionTracking]]:
    """
    Group tracking records by student, in first-seen student order.

    Args:
        trackings: Student session tracking records

    Returns:
        Dict[int, List[StudentSessionTracking]]: student id -> records
    """
    grouped: Dict[int, List[StudentSessionTracking]] = {}
    for tracking in trackings:
        grouped.setdefault(tracking.student_id, []).append(tracking)
    return grouped


def group_sessions_by_group(sessions: Iterable[Session]) -> Dict[int, List[Session]]:
    """
    Group sessions by the group that taught them, in first-seen order.

    Args:
        sessions: Completed sessions

    Returns:
        Dict[int, List[Session]]: group id -> sessions in input order
    """
    grouped: Dict[int, List[Session]] = {}
    for session in sessions:
        grouped.setdefault(session.group_id, []).append(session)
    return grouped


def build_group_lookup(groups: Iterable[Group]) -> Dict[int, Group]:
    """Index groups by id."""
    return {group.id: group for group in groups}


def build_student_lookup(students: Iterable[Student]) -> Dict[int, Student]:
    """Index students by id."""
    return {student.id: student for student in students}


def resolve_group_name(group_lookup: Dict[int, Group], group_id: int) -> str:
    """
    Get a group's name, or a placeholder when the group is unknown.

    Args:
        group_lookup: Groups indexed by id
        group_id: Group to name

    Returns:
        str: Group name
    """
    group = group_lookup.get(group_id)
    return group.name if group else fallback_group_name(group_id)
