"""
Rule-based recommendations for the error-pattern analysis report.

Rules run in a fixed order and every rule that matches contributes its
message, so the output order is the rule order. The engine only reads the
computed insights and never the raw records.
"""

from typing import Callable, List, Optional, Sequence

from emerge_analytics.data.models import (
    AnalysisSummary,
    AnalysisThresholds,
    CrossGroupPattern,
    CurriculumInsight,
    PatternInsight,
    Trend,
)

HEALTHY_MESSAGE = (
    "Error patterns and correction effectiveness look healthy. "
    "Continue monitoring for emerging patterns."
)


def _quote_patterns(patterns: Sequence[PatternInsight], limit: int) -> str:
    return ", ".join(f'"{pattern.error_pattern}"' for pattern in patterns[:limit])


def _low_overall_effectiveness(context: "RecommendationContext") -> List[str]:
    """
    Flag low effectiveness across every logged error.

    Only fires once at least one error occurrence is logged. An empty error
    bank and a bank seeded with entries that never occurred (all occurrence
    counts 0) both skip this rule and can reach the healthy fallback.
    """
    if context.summary.total_errors == 0:
        return []
    avg = context.summary.avg_effectiveness
    if avg < context.thresholds.low_overall_effectiveness:
        return [
            f"Overall correction effectiveness is {avg}%. Consider reviewing correction "
            "protocols and providing additional teacher training."
        ]
    return []


def _low_effectiveness_patterns(context: "RecommendationContext") -> List[str]:
    thresholds = context.thresholds
    low = [
        pattern
        for pattern in context.top_patterns
        if pattern.effectiveness_rate < thresholds.low_pattern_effectiveness
        and pattern.occurrence_count >= thresholds.low_pattern_min_occurrences
    ]
    if not low:
        return []
    return [
        f"{len(low)} error pattern(s) have correction effectiveness below "
        f"{thresholds.low_pattern_effectiveness}%. Review: "
        f"{_quote_patterns(low, thresholds.low_pattern_review_limit)}"
    ]


def _widespread_pattern(context: "RecommendationContext") -> List[str]:
    if not context.cross_group_patterns:
        return []
    top = context.cross_group_patterns[0]
    return [
        f'"{top.pattern}" appears across {len(top.groups)} groups '
        f"({top.total_occurrences} occurrences). Consider school-wide intervention "
        "or professional development on this topic."
    ]


def _increasing_patterns(context: "RecommendationContext") -> List[str]:
    declining = [p for p in context.top_patterns if p.trend == Trend.DECLINING]
    if not declining:
        return []
    return [
        f"{len(declining)} error pattern(s) are increasing in frequency. "
        f"Prioritize intervention for: "
        f"{_quote_patterns(declining, context.thresholds.declining_pattern_limit)}"
    ]


def _low_curriculum_effectiveness(context: "RecommendationContext") -> List[str]:
    thresholds = context.thresholds
    return [
        f"{insight.curriculum.short_name()} curriculum has {insight.avg_effectiveness}% "
        "correction effectiveness. Consider curriculum-specific training."
        for insight in context.curriculum_insights
        if insight.avg_effectiveness < thresholds.low_curriculum_effectiveness
        and insight.total_errors >= thresholds.low_curriculum_min_errors
    ]


def _decreasing_patterns(context: "RecommendationContext") -> List[str]:
    improving = [p for p in context.top_patterns if p.trend == Trend.IMPROVING]
    if not improving:
        return []
    return [
        f"Great progress! {len(improving)} error pattern(s) are decreasing in "
        "frequency, indicating effective interventions."
    ]


class RecommendationContext:
    """Inputs shared by every recommendation rule."""

    def __init__(
        self,
        top_patterns: Sequence[PatternInsight],
        cross_group_patterns: Sequence[CrossGroupPattern],
        curriculum_insights: Sequence[CurriculumInsight],
        summary: AnalysisSummary,
        thresholds: AnalysisThresholds,
    ):
        self.top_patterns = list(top_patterns)
        self.cross_group_patterns = list(cross_group_patterns)
        self.curriculum_insights = list(curriculum_insights)
        self.summary = summary
        self.thresholds = thresholds


# Evaluation order is output order
RULES: List[Callable[[RecommendationContext], List[str]]] = [
    _low_overall_effectiveness,
    _low_effectiveness_patterns,
    _widespread_pattern,
    _increasing_patterns,
    _low_curriculum_effectiveness,
    _decreasing_patterns,
]


def generate_recommendations(
    top_patterns: Sequence[PatternInsight],
    cross_group_patterns: Sequence[CrossGroupPattern],
    curriculum_insights: Sequence[CurriculumInsight],
    summary: AnalysisSummary,
    thresholds: Optional[AnalysisThresholds] = None,
) -> List[str]:
    """
    Turn the analysis results into ordered, human-readable recommendations.

    Args:
        top_patterns: Ranked pattern insights
        cross_group_patterns: Ranked cross-group patterns
        curriculum_insights: Per-curriculum insights
        summary: Global summary numbers
        thresholds: Engine thresholds (defaults when omitted)

    Returns:
        List[str]: Messages in rule order; a single healthy message when no
        rule matched
    """
    context = RecommendationContext(
        top_patterns,
        cross_group_patterns,
        curriculum_insights,
        summary,
        thresholds or AnalysisThresholds(),
    )

    recommendations: List[str] = []
    for rule in RULES:
        recommendations.extend(rule(context))

    if not recommendations:
        recommendations.append(HEALTHY_MESSAGE)
    return recommendations
