"""
Keysmith Core Data Models
==========================

Pydantic models exchanged between the generator, the analyzers, the
engine facade and the output layer. Every report is derived purely from
its input and is recreated on each call; none of them carries identity
or persisted state.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class StrengthLevel(str, enum.Enum):
    """Ordinal strength label derived from the 0-100 score."""

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"
    EXCELLENT = "excellent"

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Very Weak"``."""
        return self.value.replace("_", " ").title()


class RecommendationType(str, enum.Enum):
    """Urgency tag of an extended-analysis recommendation."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


# ===================================================================== #
#  Generation
# ===================================================================== #


CLASS_ORDER: tuple[str, ...] = ("uppercase", "lowercase", "numbers", "symbols")


class GenerationOptions(BaseModel):
    """Constraints for one password generation request.

    At least one ``include_*`` flag must be set; the generator rejects
    the options otherwise. ``exclude_ambiguous`` only affects symbols.
    """

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=16, ge=1)
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False
    exclude_ambiguous: bool = False

    def selected_classes(self) -> list[str]:
        """Names of the selected classes in canonical order."""
        flags = (
            self.include_uppercase,
            self.include_lowercase,
            self.include_numbers,
            self.include_symbols,
        )
        return [name for name, on in zip(CLASS_ORDER, flags) if on]

    def has_any_class(self) -> bool:
        return bool(self.selected_classes())


# ===================================================================== #
#  Strength Analysis
# ===================================================================== #


class StrengthBreakdown(BaseModel):
    """Normalised [0, 1] bars for length, class variety and entropy."""

    length: float = 0.0
    variety: float = 0.0
    entropy: float = 0.0


class StrengthReport(BaseModel):
    """Heuristic strength assessment of a single password.

    The empty report (see :meth:`empty`) has no score, no level and no
    suggestions.

    Attributes:
        length: Number of characters.
        has_uppercase / has_lowercase / has_numbers / has_symbols:
            Character class presence.
        has_repeated_char: Some character occurs more than once.
        has_sequential_run: A 3-character alphabetic, numeric or
            keyboard run (forward or reverse) is present.
        entropy_bits: ``length * log2(nominal pool size)``.
        score: Integer score in [0, 100], ``None`` for empty input.
        level: Strength level, ``None`` for empty input.
        suggestions: Improvement suggestions in fixed order.
        breakdown: Normalised bars for visualisation.
    """

    length: int = 0
    has_uppercase: bool = False
    has_lowercase: bool = False
    has_numbers: bool = False
    has_symbols: bool = False
    has_repeated_char: bool = False
    has_sequential_run: bool = False
    entropy_bits: float = 0.0
    score: Optional[int] = Field(default=None, ge=0, le=100)
    level: Optional[StrengthLevel] = None
    suggestions: list[str] = Field(default_factory=list)
    breakdown: Optional[StrengthBreakdown] = None

    @classmethod
    def empty(cls) -> StrengthReport:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.score is None

    @property
    def class_count(self) -> int:
        return sum(
            (self.has_uppercase, self.has_lowercase, self.has_numbers, self.has_symbols)
        )

    def criteria(self) -> list[tuple[str, bool]]:
        """Checklist items and whether each one is met."""
        return [
            ("At least 8 characters", self.length >= 8),
            ("Uppercase letters", self.has_uppercase),
            ("Lowercase letters", self.has_lowercase),
            ("Numbers", self.has_numbers),
            ("Special characters", self.has_symbols),
            ("12+ characters", self.length >= 12),
        ]


class PatternFlags(BaseModel):
    """Weak-pattern detections for one password."""

    keyboard: bool = False
    dictionary: bool = False
    personal: bool = False
    repeated: bool = False


class Recommendation(BaseModel):
    """A tagged extended-analysis recommendation."""

    type: RecommendationType
    text: str


class ExtendedReport(BaseModel):
    """Strength report combined with pattern and weak-list checks."""

    report: StrengthReport = Field(default_factory=StrengthReport)
    patterns: PatternFlags = Field(default_factory=PatternFlags)
    is_common: bool = False
    is_leaked: bool = False
    recommendations: list[Recommendation] = Field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for r in self.recommendations if r.type == RecommendationType.CRITICAL)


# ===================================================================== #
#  Generation Audit
# ===================================================================== #


class CharacterFrequency(BaseModel):
    """Observed versus expected occurrences of one character."""

    char: str
    observed: int
    expected: float


class GenerationAudit(BaseModel):
    """Statistics over a batch of generated passwords.

    Attributes:
        options: Options the batch was generated with.
        samples: Number of passwords generated.
        total_characters: Sum of password lengths.
        frequencies: Observed and expected count per candidate character.
        chi_squared: Pearson statistic of observed against expected.
        p_value: Upper-tail probability of ``chi_squared``.
        degrees_of_freedom: Number of bins minus one.
        consistent: ``p_value >= significance``.
        class_coverage: Fraction of samples containing every selected class.
        foreign_characters: Characters seen outside the filtered charset.
    """

    options: GenerationOptions
    samples: int = 0
    total_characters: int = 0
    frequencies: list[CharacterFrequency] = Field(default_factory=list)
    chi_squared: float = 0.0
    p_value: float = 1.0
    degrees_of_freedom: int = 0
    significance: float = 0.01
    consistent: bool = True
    class_coverage: float = 0.0
    foreign_characters: list[str] = Field(default_factory=list)
