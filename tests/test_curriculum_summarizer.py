from emerge_analytics.analyzers.curriculum_summarizer import (
    summarize_curricula,
    summarize_curriculum,
)
from emerge_analytics.data.models import AnalysisThresholds, Curriculum, ErrorBankEntry

from factories import error_doc


def _records(*docs):
    return [ErrorBankEntry.model_validate(doc) for doc in docs]


def test_curricula_without_records_are_left_out():
    records = _records(
        error_doc("reversal", 10, 4, curriculum="camino"),
        error_doc("sign error", 6, 3, curriculum="delta_math"),
    )

    insights = summarize_curricula(records)

    assert [i.curriculum for i in insights] == [Curriculum.DELTA_MATH, Curriculum.CAMINO]


def test_totals_and_average_effectiveness():
    records = _records(
        error_doc("a", 10, 4),
        error_doc("b", 6, 3),
        error_doc("other", 50, 50, curriculum="amira"),
    )

    insight = summarize_curriculum(Curriculum.WILSON, records)

    assert insight.total_errors == 16
    assert insight.unique_patterns == 2
    assert insight.avg_effectiveness == 44


def test_most_common_error_prefers_first_on_ties():
    records = _records(error_doc("first", 7, 1), error_doc("second", 7, 6))

    assert summarize_curriculum(Curriculum.WILSON, records).most_common_error == "first"


def test_least_effective_error_ignores_rare_patterns():
    records = _records(
        error_doc("rare", 2, 0),
        error_doc("weak", 10, 2),
        error_doc("strong", 10, 9),
    )

    insight = summarize_curriculum(Curriculum.WILSON, records)

    assert insight.least_effective_error == "weak"


def test_least_effective_error_is_none_below_floor():
    records = _records(error_doc("rare", 2, 0), error_doc("rarer", 1, 0))

    insight = summarize_curriculum(Curriculum.WILSON, records)

    assert insight.least_effective_error is None
    assert insight.most_common_error == "rare"


def test_least_effective_floor_is_configurable():
    records = _records(error_doc("rare", 2, 0), error_doc("weak", 10, 2))

    insight = summarize_curriculum(
        Curriculum.WILSON, records, AnalysisThresholds(least_effective_min_occurrences=1)
    )

    assert insight.least_effective_error == "rare"


def test_zero_occurrence_records_still_produce_a_row():
    records = _records(error_doc("logged later", 0, 0, curriculum="wordgen"))

    [insight] = summarize_curricula(records)

    assert insight.curriculum == Curriculum.WORDGEN
    assert insight.total_errors == 0
    assert insight.unique_patterns == 1
    assert insight.avg_effectiveness == 0


def test_despegando_is_not_summarized():
    records = _records(error_doc("acentos", 12, 2, curriculum="despegando"))

    assert summarize_curricula(records) == []
