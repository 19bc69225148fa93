"""
Models package for the error-pattern analytics system.

This package contains all the data models used for representing the
intervention data snapshot and the analysis results built from it.
"""

# Re-export enums
from .enums import (
    Curriculum,
    SessionStatus,
    Trend,
    ANALYZED_CURRICULA,
)

# Re-export entity models
from .error_bank_model import ErrorBankEntry
from .session_model import Session, ObservedError
from .group_model import Group, Student, fallback_group_name
from .tracking_model import StudentSessionTracking
from .snapshot_model import AnalysisSnapshot

# Re-export analysis models
from .analysis_model import (
    AnalysisThresholds,
    PatternInsight,
    CurriculumInsight,
    GroupOccurrence,
    CrossGroupPattern,
    StudentErrorProfile,
    AnalysisSummary,
    AnalysisReport,
    DashboardPattern,
    PatternSummary,
)

# Define all models for easy access
__all__ = [
    # Enums
    "Curriculum",
    "SessionStatus",
    "Trend",
    "ANALYZED_CURRICULA",
    # Entity models
    "ErrorBankEntry",
    "Session",
    "ObservedError",
    "Group",
    "Student",
    "fallback_group_name",
    "StudentSessionTracking",
    "AnalysisSnapshot",
    # Analysis models
    "AnalysisThresholds",
    "PatternInsight",
    "CurriculumInsight",
    "GroupOccurrence",
    "CrossGroupPattern",
    "StudentErrorProfile",
    "AnalysisSummary",
    "AnalysisReport",
    "DashboardPattern",
    "PatternSummary",
]
