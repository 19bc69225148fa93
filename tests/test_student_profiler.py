import logging

from emerge_analytics.analyzers.student_profiler import build_student_profiles
from emerge_analytics.data.models import Group, Student, StudentSessionTracking

from factories import tracking_doc


def _trackings(*docs):
    return [StudentSessionTracking.model_validate(doc) for doc in docs]


STUDENTS = [
    Student(id=1, name="Ana", group_id=10),
    Student(id=2, name="Ben", group_id=20),
    Student(id=3, name="Cy", group_id=10),
]
GROUPS = [Group(id=10, name="Morning Wilson")]


def test_profile_aggregates_all_tracking_records():
    trackings = _trackings(
        tracking_doc(1, ["b/d", "b/d", "vowel"], {"b/d": True, "vowel": False}),
        tracking_doc(1, ["vowel", "blend"], {"vowel": True}, session_id=2),
    )

    [profile] = build_student_profiles(trackings, STUDENTS, GROUPS)

    assert profile.student_name == "Ana"
    assert profile.group_id == 10
    assert profile.group_name == "Morning Wilson"
    assert profile.error_patterns == ["b/d", "vowel", "blend"]
    assert profile.total_errors == 5
    assert profile.correction_success_rate == 67


def test_no_corrections_means_zero_success_rate():
    [profile] = build_student_profiles(_trackings(tracking_doc(3, ["x"])), STUDENTS, GROUPS)

    assert profile.correction_success_rate == 0


def test_unknown_students_are_skipped_with_warning(caplog):
    trackings = _trackings(tracking_doc(99, ["x", "y"]), tracking_doc(3, ["x"]))

    with caplog.at_level(logging.WARNING):
        profiles = build_student_profiles(trackings, STUDENTS, GROUPS)

    assert [p.student_id for p in profiles] == [3]
    assert "unknown student 99" in caplog.text


def test_missing_group_uses_placeholder_name():
    [profile] = build_student_profiles(_trackings(tracking_doc(2, ["x"])), STUDENTS, GROUPS)

    assert profile.group_name == "Group 20"


def test_sorted_by_total_errors_with_stable_ties():
    trackings = _trackings(
        tracking_doc(3, ["a"]),
        tracking_doc(1, ["a"]),
        tracking_doc(2, ["a", "b", "c"]),
    )

    profiles = build_student_profiles(trackings, STUDENTS, GROUPS)

    assert [p.student_id for p in profiles] == [2, 3, 1]


def test_limited_to_twenty_profiles():
    students = [Student(id=i, name=f"S{i}", group_id=10) for i in range(25)]
    trackings = _trackings(*[tracking_doc(i, ["x"] * (i + 1)) for i in range(25)])

    profiles = build_student_profiles(trackings, students, GROUPS)

    assert len(profiles) == 20
    assert profiles[0].student_id == 24
    assert profiles[-1].total_errors == 6
