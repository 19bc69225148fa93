from emerge_analytics.analyzers.top_pattern_ranker import (
    overall_effectiveness,
    rank_top_patterns,
    summarize_top_patterns,
)
from emerge_analytics.data.models import (
    AnalysisThresholds,
    Curriculum,
    ErrorBankEntry,
    Session,
    Trend,
)

from factories import error_doc, session_doc


def _records(*docs):
    return [ErrorBankEntry.model_validate(doc) for doc in docs]


def test_single_record_without_sessions():
    records = _records(error_doc("omits final sound", 10, 3, curriculum="wilson"))

    [insight] = rank_top_patterns(records, [], {}, {})

    assert insight.error_pattern == "omits final sound"
    assert insight.curriculum == Curriculum.WILSON
    assert insight.effectiveness_rate == 30
    assert insight.groups_affected == 0
    assert insight.students_affected == 0
    assert insight.trend == Trend.STABLE


def test_ranked_by_occurrence_with_ties_in_storage_order():
    records = _records(
        error_doc("a", 3, 1),
        error_doc("b", 9, 1),
        error_doc("c", 3, 2),
        error_doc("never", 0, 0),
        error_doc("d", 9, 0),
    )

    insights = rank_top_patterns(records, [], {}, {})

    assert [i.error_pattern for i in insights] == ["b", "d", "a", "c"]


def test_limited_to_top_ten_by_default():
    records = _records(*[error_doc(f"p{i}", i + 1, 0) for i in range(12)])

    insights = rank_top_patterns(records, [], {}, {})

    assert len(insights) == 10
    assert insights[0].error_pattern == "p11"
    counts = [i.occurrence_count for i in insights]
    assert counts == sorted(counts, reverse=True)


def test_limit_comes_from_thresholds():
    records = _records(*[error_doc(f"p{i}", i + 1, 0) for i in range(4)])

    insights = rank_top_patterns(records, [], {}, {}, AnalysisThresholds(top_pattern_limit=2))

    assert [i.error_pattern for i in insights] == ["p3", "p2"]


def test_effectiveness_rounds_half_up():
    records = _records(error_doc("half", 8, 1), error_doc("small", 40, 1))

    rates = {i.error_pattern: i.effectiveness_rate for i in rank_top_patterns(records, [], {}, {})}

    assert rates == {"half": 13, "small": 3}


def test_effectiveness_stays_within_bounds():
    records = _records(error_doc("none", 7, 0), error_doc("all", 7, 7), error_doc("some", 7, 4))

    for insight in rank_top_patterns(records, [], {}, {}):
        assert 0 <= insight.effectiveness_rate <= 100


def test_reach_and_trend_come_from_indexes_and_sessions():
    records = _records(error_doc("P", 5, 2, protocol="Tap and blend"))
    sessions = [
        Session.model_validate(session_doc(1, "2024-01-01", ["P"])),
        Session.model_validate(session_doc(2, "2024-01-02", ["P"])),
        Session.model_validate(session_doc(1, "2024-01-03")),
        Session.model_validate(session_doc(2, "2024-01-04")),
    ]

    [insight] = rank_top_patterns(records, sessions, {"P": {1, 2}}, {"P": {10, 11, 12}})

    assert insight.groups_affected == 2
    assert insight.students_affected == 3
    assert insight.correction_protocol == "Tap and blend"
    assert insight.trend == Trend.IMPROVING


def test_dashboard_rows_and_overall_effectiveness():
    records = _records(
        error_doc("a", 4, 1),
        error_doc("b", 10, 5),
        error_doc("c", 0, 0),
    )

    rows = summarize_top_patterns(records, 5)

    assert [(r.pattern, r.count, r.effectiveness) for r in rows] == [("b", 10, 50), ("a", 4, 25)]
    assert overall_effectiveness(records) == 43
    assert overall_effectiveness([]) == 0
