"""Shared fixtures for the error-pattern analytics tests."""

import matplotlib

matplotlib.use("Agg")

import os

import pytest

from config.settings import Settings
from emerge_analytics.data.data_repository import DataRepository
from emerge_analytics.data.db.inmemory_db import InMemoryDatabase

# Snapshot field -> storage collection name
COLLECTION_NAMES = {
    "error_records": "error_bank",
    "sessions": "sessions",
    "groups": "groups",
    "students": "students",
    "trackings": "student_session_tracking",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings overrides from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("EMERGE_ANALYTICS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path):
    settings = Settings()
    settings.set_data_dir(str(tmp_path / "input"))
    settings.OUTPUT_DIR = tmp_path / "output"
    settings.LOG_DIR = tmp_path / "logs"
    return settings


@pytest.fixture
def build_repository(settings):
    """Factory for a DataRepository backed by an in-memory database."""

    def _build(error_records=(), sessions=(), groups=(), students=(), trackings=()):
        db = InMemoryDatabase()
        collections = {
            "error_records": error_records,
            "sessions": sessions,
            "groups": groups,
            "students": students,
            "trackings": trackings,
        }
        for field, documents in collections.items():
            if documents:
                db.insert_many(COLLECTION_NAMES[field], list(documents))
        return DataRepository(config=settings, db=db)

    return _build


@pytest.fixture
def sample_report():
    """Small hand-built report covering every table."""
    from emerge_analytics.data.models import (
        AnalysisReport,
        AnalysisSummary,
        CrossGroupPattern,
        Curriculum,
        CurriculumInsight,
        GroupOccurrence,
        PatternInsight,
        StudentErrorProfile,
        Trend,
    )

    return AnalysisReport(
        summary=AnalysisSummary(
            total_groups=2,
            total_students=3,
            total_errors=20,
            avg_effectiveness=45,
            analyzed_sessions=6,
        ),
        top_error_patterns=[
            PatternInsight(
                error_pattern="reverses b/d when reading multisyllabic words aloud",
                curriculum=Curriculum.WILSON,
                occurrence_count=12,
                effectiveness_count=4,
                effectiveness_rate=33,
                groups_affected=2,
                students_affected=3,
                correction_protocol="Bed visual cue",
                trend=Trend.DECLINING,
            ),
            PatternInsight(
                error_pattern="sign error",
                curriculum=Curriculum.DELTA_MATH,
                occurrence_count=8,
                effectiveness_count=5,
                effectiveness_rate=63,
                groups_affected=1,
                students_affected=1,
                correction_protocol="",
                trend=Trend.IMPROVING,
            ),
        ],
        curriculum_insights=[
            CurriculumInsight(
                curriculum=Curriculum.WILSON,
                total_errors=12,
                unique_patterns=1,
                avg_effectiveness=33,
                most_common_error="reverses b/d when reading multisyllabic words aloud",
                least_effective_error="reverses b/d when reading multisyllabic words aloud",
            ),
            CurriculumInsight(
                curriculum=Curriculum.DELTA_MATH,
                total_errors=8,
                unique_patterns=1,
                avg_effectiveness=63,
                most_common_error="sign error",
                least_effective_error="sign error",
            ),
        ],
        cross_group_patterns=[
            CrossGroupPattern(
                pattern="reverses b/d when reading multisyllabic words aloud",
                groups=[
                    GroupOccurrence(group_id=2, group_name="Green", occurrences=5),
                    GroupOccurrence(group_id=1, group_name="Blue", occurrences=2),
                ],
                total_occurrences=7,
                suggested_intervention="Bed visual cue",
            )
        ],
        student_profiles=[
            StudentErrorProfile(
                student_id=1,
                student_name="Ana",
                group_id=1,
                group_name="Blue",
                error_patterns=["reverses b/d when reading multisyllabic words aloud", "sign error"],
                total_errors=3,
                correction_success_rate=67,
            )
        ],
        recommendations=["Overall correction effectiveness is 45%."],
    )
