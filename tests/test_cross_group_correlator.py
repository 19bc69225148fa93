from emerge_analytics.analyzers.cross_group_correlator import (
    DEFAULT_INTERVENTION,
    count_cross_group_patterns,
    find_cross_group_patterns,
)
from emerge_analytics.data.models import AnalysisThresholds, ErrorBankEntry, Group, Session

from factories import error_doc, session_doc


def _sessions(*docs):
    return [Session.model_validate(doc) for doc in docs]


GROUPS = [Group(id=1, name="Wilson Step 1"), Group(id=2, name="Wilson Step 2")]


def test_pattern_in_two_groups_is_ranked_with_groups_by_count():
    sessions = _sessions(
        session_doc(1, "2024-01-01", ["Q", "Q"]),
        session_doc(1, "2024-01-02", ["Q"]),
        session_doc(2, "2024-01-01", ["Q", "Q", "Q"]),
        session_doc(2, "2024-01-02", ["Q"], unexpected=["Q"]),
    )

    [cross] = find_cross_group_patterns(sessions, GROUPS, [])

    assert cross.pattern == "Q"
    assert [(g.group_id, g.group_name, g.occurrences) for g in cross.groups] == [
        (2, "Wilson Step 2", 5),
        (1, "Wilson Step 1", 3),
    ]
    assert cross.total_occurrences == 8


def test_single_group_patterns_are_excluded():
    sessions = _sessions(
        session_doc(1, "2024-01-01", ["only here", "shared"]),
        session_doc(2, "2024-01-02", ["shared"]),
    )

    patterns = find_cross_group_patterns(sessions, GROUPS, [])

    assert [c.pattern for c in patterns] == ["shared"]
    assert all(len(c.groups) >= 2 for c in patterns)


def test_intervention_comes_from_first_matching_error_record():
    sessions = _sessions(session_doc(1, "2024-01-01", ["P"]), session_doc(2, "2024-01-01", ["P"]))
    records = [
        ErrorBankEntry.model_validate(error_doc("P", 4, 2, protocol="Finger tapping")),
        ErrorBankEntry.model_validate(error_doc("P", 9, 1, curriculum="amira", protocol="Other")),
    ]

    [cross] = find_cross_group_patterns(sessions, GROUPS, records)

    assert cross.suggested_intervention == "Finger tapping"


def test_missing_or_empty_protocol_uses_default_suggestion():
    sessions = _sessions(
        session_doc(1, "2024-01-01", ["P", "R"]),
        session_doc(2, "2024-01-01", ["P", "R"]),
    )
    records = [ErrorBankEntry.model_validate(error_doc("R", 4, 2, protocol=None))]

    patterns = find_cross_group_patterns(sessions, GROUPS, records)

    assert {c.pattern: c.suggested_intervention for c in patterns} == {
        "P": DEFAULT_INTERVENTION,
        "R": DEFAULT_INTERVENTION,
    }


def test_unknown_group_gets_placeholder_name():
    sessions = _sessions(session_doc(1, "2024-01-01", ["P"]), session_doc(42, "2024-01-01", ["P"]))

    [cross] = find_cross_group_patterns(sessions, GROUPS, [])

    assert {g.group_name for g in cross.groups} == {"Wilson Step 1", "Group 42"}


def test_sorted_by_total_and_limited():
    docs = []
    for i in range(12):
        pattern = f"p{i}"
        docs.append(session_doc(1, "2024-01-01", [pattern] * (i + 1)))
        docs.append(session_doc(2, "2024-01-02", [pattern]))

    patterns = find_cross_group_patterns(_sessions(*docs), GROUPS, [])

    assert len(patterns) == 10
    totals = [c.total_occurrences for c in patterns]
    assert totals == sorted(totals, reverse=True)
    assert patterns[0].pattern == "p11"


def test_ties_keep_first_seen_order():
    sessions = _sessions(
        session_doc(1, "2024-01-01", ["late", "early"]),
        session_doc(2, "2024-01-02", ["early", "late"]),
    )

    patterns = find_cross_group_patterns(sessions, GROUPS, [])

    assert [c.pattern for c in patterns] == ["late", "early"]


def test_count_uses_minimum_group_threshold():
    index = {"a": {1, 2}, "b": {1}, "c": {1, 2, 3}}

    assert count_cross_group_patterns(index) == 2
    assert count_cross_group_patterns(index, AnalysisThresholds(cross_group_min_groups=3)) == 1
