"""
Keysmith Core Module
=====================

Data models and error taxonomy. The engine facade lives in
:mod:`keysmith.core.engine`.
"""

from keysmith.core.errors import (
    EmptyFilteredClass,
    GenerationError,
    KeysmithError,
    NoCharacterClassSelected,
    RandomUnavailable,
)
from keysmith.core.models import (
    ExtendedReport,
    GenerationAudit,
    GenerationOptions,
    PatternFlags,
    Recommendation,
    RecommendationType,
    StrengthBreakdown,
    StrengthLevel,
    StrengthReport,
)

__all__ = [
    "EmptyFilteredClass",
    "ExtendedReport",
    "GenerationAudit",
    "GenerationError",
    "GenerationOptions",
    "KeysmithError",
    "NoCharacterClassSelected",
    "PatternFlags",
    "RandomUnavailable",
    "Recommendation",
    "RecommendationType",
    "StrengthBreakdown",
    "StrengthLevel",
    "StrengthReport",
]
