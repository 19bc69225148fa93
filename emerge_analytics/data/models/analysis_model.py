"""
Analysis result models for the error-pattern analytics system.

Contains models for representing analysis outputs (pattern insights,
curriculum insights, cross-group patterns, student profiles and the
composed report) plus the threshold configuration the engine runs with.
Result models serialize with camelCase aliases, the field names the
reporting UI consumes.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import Curriculum, Trend


class AnalysisModel(BaseModel):
    """Base class for engine outputs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        """Dictionary representation using the camelCase report field names."""
        return self.model_dump(by_alias=True, mode="json")


class AnalysisThresholds(BaseModel):
    """
    Fixed decision constants for the analytics engine.

    Every numeric cut-off the engine uses lives here so that callers and
    tests can probe boundary behavior without editing engine code.
    """

    model_config = ConfigDict(frozen=True)

    # Trend classification: rate shift required to call a trend
    trend_shift: float = Field(default=0.1, ge=0)

    # Result sizes
    top_pattern_limit: int = Field(default=10, ge=0)
    cross_group_limit: int = Field(default=10, ge=0)
    student_profile_limit: int = Field(default=20, ge=0)
    dashboard_pattern_limit: int = Field(default=5, ge=0)

    # Minimum distinct groups for a cross-group pattern
    cross_group_min_groups: int = Field(default=2, ge=1)

    # Minimum occurrences before a pattern can be a curriculum's least effective
    least_effective_min_occurrences: int = Field(default=3, ge=0)

    # Recommendation rules
    low_overall_effectiveness: int = 50
    low_pattern_effectiveness: int = 40
    low_pattern_min_occurrences: int = 5
    low_pattern_review_limit: int = 3
    declining_pattern_limit: int = 2
    low_curriculum_effectiveness: int = 50
    low_curriculum_min_errors: int = 10


class PatternInsight(AnalysisModel):
    """Ranked insight for one error bank pattern."""

    error_pattern: str
    curriculum: Curriculum
    occurrence_count: int
    effectiveness_count: int
    effectiveness_rate: int  # 0-100
    groups_affected: int
    students_affected: int
    correction_protocol: str
    trend: Trend


class CurriculumInsight(AnalysisModel):
    """Aggregate error statistics for one curriculum."""

    curriculum: Curriculum
    total_errors: int = 0
    unique_patterns: int = 0
    avg_effectiveness: int = 0
    most_common_error: Optional[str] = None
    least_effective_error: Optional[str] = None


class GroupOccurrence(AnalysisModel):
    """How often a pattern was logged within one group."""

    group_id: int
    group_name: str
    occurrences: int


class CrossGroupPattern(AnalysisModel):
    """Error pattern observed in two or more intervention groups."""

    pattern: str
    groups: List[GroupOccurrence]
    total_occurrences: int
    suggested_intervention: str


class StudentErrorProfile(AnalysisModel):
    """Error history of one student across all tracked sessions."""

    student_id: int
    student_name: str
    group_id: int
    group_name: str
    error_patterns: List[str]
    total_errors: int
    correction_success_rate: int


class AnalysisSummary(AnalysisModel):
    """Headline numbers for the whole snapshot."""

    total_groups: int
    total_students: int
    total_errors: int
    avg_effectiveness: int
    analyzed_sessions: int


class AnalysisReport(AnalysisModel):
    """Complete cross-group pattern analysis."""

    summary: AnalysisSummary
    top_error_patterns: List[PatternInsight]
    curriculum_insights: List[CurriculumInsight]
    cross_group_patterns: List[CrossGroupPattern]
    student_profiles: List[StudentErrorProfile]
    recommendations: List[str]


class DashboardPattern(AnalysisModel):
    """Compact pattern row for the dashboard summary."""

    pattern: str
    count: int
    effectiveness: int


class PatternSummary(AnalysisModel):
    """Low-latency dashboard variant of the analysis."""

    top_patterns: List[DashboardPattern]
    cross_group_count: int
    avg_effectiveness: int
