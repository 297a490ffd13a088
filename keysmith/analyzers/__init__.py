"""
Keysmith Analyzers
===================

Heuristic strength scoring, weak-pattern detection, the combined
extended analysis and the generator distribution audit.
"""

from keysmith.analyzers.distribution import GenerationAuditor
from keysmith.analyzers.extended import ExtendedAnalyzer, analyze_extended
from keysmith.analyzers.patterns import PatternDetector
from keysmith.analyzers.strength import StrengthAnalyzer, analyze

__all__ = [
    "ExtendedAnalyzer",
    "GenerationAuditor",
    "PatternDetector",
    "StrengthAnalyzer",
    "analyze",
    "analyze_extended",
]
