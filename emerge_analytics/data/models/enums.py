"""
Enumerations for the error-pattern analytics system.

This module defines the enumerations used throughout the system,
providing type safety and documentation for categorical data.
Compatible with Pydantic models.
"""

from enum import Enum
from typing import Dict, List

from emerge_analytics.utils.safe_ops import safe_str


class Curriculum(str, Enum):
    """Intervention curricula an error bank entry or group can belong to."""

    WILSON = "wilson"
    DELTA_MATH = "delta_math"
    CAMINO = "camino"
    WORDGEN = "wordgen"
    AMIRA = "amira"
    DESPEGANDO = "despegando"

    @classmethod
    def get_label(cls, curriculum: "Curriculum") -> str:
        """Get the display label for a curriculum"""
        value = curriculum.value if isinstance(curriculum, cls) else safe_str(curriculum)
        return CURRICULUM_LABELS.get(value, value)

    def short_name(self) -> str:
        """Curriculum name as used in recommendation text ("delta_math" -> "delta math")."""
        return self.value.replace("_", " ", 1)


# Closed list of curricula the curriculum summarizer reports on, in report order.
# Despegando records still count toward global totals and top patterns.
ANALYZED_CURRICULA: List[Curriculum] = [
    Curriculum.WILSON,
    Curriculum.DELTA_MATH,
    Curriculum.CAMINO,
    Curriculum.WORDGEN,
    Curriculum.AMIRA,
]


class SessionStatus(str, Enum):
    """Lifecycle status of an intervention session."""

    PLANNED = "planned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Trend(str, Enum):
    """Direction of an error pattern's frequency over the session history."""

    IMPROVING = "improving"  # Fewer sessions show the pattern later on
    DECLINING = "declining"  # More sessions show the pattern later on
    STABLE = "stable"


# Human-readable labels used in exported reports
CURRICULUM_LABELS: Dict[str, str] = {
    "wilson": "Wilson Reading System",
    "delta_math": "Delta Math",
    "camino": "Camino a la Lectura",
    "wordgen": "WordGen",
    "amira": "Amira Learning",
    "despegando": "Despegando (Spanish)",
}
