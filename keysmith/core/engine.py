"""
Keysmith Engine
================

Central orchestrator for Keysmith. :class:`KeysmithEngine` composes the
password generator, the strength and extended analyzers and the
distribution auditor, and wraps their results in
:class:`shared.models.ScanResult` envelopes for the output layer.

Generation and analysis calls are decorated with timing and usage-event
instrumentation when the engine is constructed; the underlying
components stay untouched.

Unlike a scan, a failed generation has no meaningful partial result, so
errors are logged and re-raised to the caller.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - NIST SP 800-63B (2017). Digital Identity Guidelines:
      Authentication and Lifecycle Management.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from shared.config import KeysmithConfig
from shared.logger import KeysmithLogger
from shared.models import Finding, ScanResult, Severity

from keysmith.analyzers.distribution import GenerationAuditor
from keysmith.analyzers.extended import ExtendedAnalyzer
from keysmith.analyzers.strength import StrengthAnalyzer
from keysmith.core.errors import KeysmithError
from keysmith.core.instrumentation import (
    EventTracker,
    LoggingEventTracker,
    timed,
    tracked,
)
from keysmith.core.models import (
    ExtendedReport,
    GenerationAudit,
    GenerationOptions,
    RecommendationType,
    StrengthLevel,
    StrengthReport,
)
from keysmith.generators.password import PasswordGenerator
from keysmith.generators.random_source import SecureRandomSource
from keysmith.history import PasswordHistory

TOOL_NAME = "keysmith"
CHECK_TARGET = "[password]"


def _generation_properties(options: GenerationOptions) -> dict[str, Any]:
    return {
        "length": options.length,
        "classes": options.selected_classes(),
        "exclude_similar": options.exclude_similar,
        "exclude_ambiguous": options.exclude_ambiguous,
    }


def _check_properties(password: str) -> Optional[dict[str, Any]]:
    # Empty input is not a check worth counting.
    if not password:
        return None
    return {"length": len(password)}


class KeysmithEngine:
    """Orchestrates generation, strength checks and generator audits.

    Usage::

        engine = KeysmithEngine()
        result = engine.generate_passwords(GenerationOptions(length=20), count=3)
        result = engine.check_password("Tr0ub4dor&3", extended=True)
        result = engine.audit_generator(GenerationOptions(), samples=2000)

    Attributes:
        config: Keysmith configuration instance.
        logger: Logger for the engine.
        generate: Instrumented single-password generation.
        analyze: Instrumented strength analysis.
        analyze_extended: Instrumented extended analysis.
    """

    def __init__(
        self,
        config: Optional[KeysmithConfig] = None,
        *,
        random_source: Optional[SecureRandomSource] = None,
        tracker: Optional[EventTracker] = None,
        logger: Optional[KeysmithLogger] = None,
    ) -> None:
        self.config = config or KeysmithConfig()
        settings = self.config.global_settings
        self.logger = logger or KeysmithLogger(
            "engine",
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )
        self._tracker = tracker or LoggingEventTracker(self.logger)

        self._generator = PasswordGenerator(random_source)
        self._strength = StrengthAnalyzer()
        self._extended = ExtendedAnalyzer(
            self._strength,
            low_entropy_threshold=self.config.analyzer.low_entropy_threshold,
        )
        self._auditor = GenerationAuditor(
            self._generator,
            significance=self.config.audit.significance,
        )

        self.generate = tracked(
            self._tracker, "password_generated", _generation_properties
        )(timed(self.logger, "password generation", "DEBUG")(self._generator.generate))
        self.analyze = tracked(
            self._tracker, "strength_checked", _check_properties
        )(timed(self.logger, "strength analysis", "DEBUG")(self._strength.analyze))
        self.analyze_extended = tracked(
            self._tracker, "extended_check", _check_properties
        )(timed(self.logger, "extended analysis", "DEBUG")(self._extended.analyze))

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def generate_passwords(
        self,
        options: GenerationOptions,
        count: Optional[int] = None,
        history: Optional[PasswordHistory] = None,
    ) -> ScanResult:
        """Generate *count* passwords satisfying *options*.

        Args:
            options: Generation constraints.
            count: Number of passwords; defaults to ``generator.batch_count``.
            history: Caller-owned history that receives each new password.

        Returns:
            ScanResult whose metadata holds ``passwords`` and ``options``.

        Raises:
            ValueError: If *count* is less than 1.
            NoCharacterClassSelected / EmptyFilteredClass: Invalid options.
            RandomUnavailable: No secure random source.
        """
        count = self.config.generator.batch_count if count is None else count
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        result = ScanResult(tool_name=TOOL_NAME, target=f"{count} password(s)")

        with self.logger.operation("generate"):
            self.logger.info(
                "Generating %d password(s) of length %d",
                count,
                options.length,
                classes=options.selected_classes(),
            )
            try:
                filtered = self._generator.filtered_classes(options)
                passwords = [self.generate(options) for _ in range(count)]
            except KeysmithError as exc:
                self.logger.error("Password generation failed: %s", exc)
                raise

        if history is not None:
            for pw in passwords:
                history.add(pw)

        selected = options.selected_classes()
        charset_size = sum(len(chars) for chars in filtered.values())
        result.metadata = {
            "passwords": passwords,
            "options": options.model_dump(mode="json"),
        }

        result.add_finding(Finding(
            severity=Severity.INFO,
            title="Passwords Generated",
            description=(
                f"Generated {count} password(s) of length {options.length} "
                f"from {len(selected)} character class(es) "
                f"({', '.join(selected)}), {charset_size} candidate characters."
            ),
            evidence={
                "count": count,
                "length": options.length,
                "classes": selected,
                "charset_size": charset_size,
                "max_entropy_bits": round(options.length * math.log2(charset_size), 2),
            },
        ))

        if options.length < len(selected):
            dropped = selected[options.length:]
            result.add_finding(Finding(
                severity=Severity.LOW,
                title="Length Below Selected Class Count",
                description=(
                    f"Length {options.length} is shorter than the {len(selected)} "
                    f"selected classes; representation of {', '.join(dropped)} "
                    f"is not guaranteed."
                ),
                evidence={"length": options.length, "unguaranteed": dropped},
                recommendation=f"Use a length of at least {len(selected)}.",
            ))

        self.logger.info("Generated %d password(s)", count)
        return result.finalize(
            f"Generated {count} password(s) of length {options.length}"
        )

    # ------------------------------------------------------------------ #
    #  Strength Check
    # ------------------------------------------------------------------ #

    def check_password(self, password: str, extended: bool = False) -> ScanResult:
        """Assess the strength of *password*.

        The password itself never appears in the result: the target is
        the literal ``[password]`` and the metadata holds the report.

        Args:
            password: Password to analyse; may be empty.
            extended: Also run pattern and weak-list detection.

        Returns:
            ScanResult with a headline finding plus one finding per
            suggestion or recommendation.
        """
        result = ScanResult(tool_name=TOOL_NAME, target=CHECK_TARGET)

        with self.logger.operation("check"):
            ext: Optional[ExtendedReport] = None
            if extended:
                ext = self.analyze_extended(password)
                report = ext.report
                result.metadata = ext.model_dump(mode="json")
            else:
                report = self.analyze(password)
                result.metadata = report.model_dump(mode="json")

            if report.is_empty:
                result.add_finding(Finding(
                    severity=Severity.INFO,
                    title="No Password Provided",
                    description="The password is empty; nothing was analysed.",
                ))
                return result.finalize("No password provided")

            self.logger.info(
                "Strength check complete",
                length=report.length,
                score=report.score,
                level=report.level.value,
            )

        level: StrengthLevel = report.level  # type: ignore[assignment]
        result.add_finding(Finding(
            severity=self._strength_severity(level),
            title=f"Password Strength: {level.label}",
            description=(
                f"Score {report.score}/100 with {report.entropy_bits:.1f} bits of "
                f"estimated entropy; {report.length} characters from "
                f"{report.class_count} of 4 character classes."
            ),
            evidence={
                "score": report.score,
                "level": level.value,
                "entropy_bits": round(report.entropy_bits, 2),
                "length": report.length,
                "repeated_char": report.has_repeated_char,
                "sequential_run": report.has_sequential_run,
            },
        ))

        suggestion_severity = (
            Severity.LOW
            if level in (StrengthLevel.VERY_WEAK, StrengthLevel.WEAK, StrengthLevel.FAIR)
            else Severity.INFO
        )
        for suggestion in report.suggestions:
            result.add_finding(Finding(
                severity=suggestion_severity,
                title=suggestion,
                description="Improvement suggested by the strength heuristics.",
                recommendation=suggestion,
            ))

        summary = f"Password strength: {level.label} ({report.score}/100)"
        if ext is not None:
            for rec in ext.recommendations:
                result.add_finding(Finding(
                    severity=self._recommendation_severity(rec.type),
                    title=rec.text,
                    description=self._recommendation_description(rec.type),
                    recommendation=rec.text,
                ))
            if ext.critical_count:
                summary += f", {ext.critical_count} critical issue(s)"

        return result.finalize(summary)

    # ------------------------------------------------------------------ #
    #  Generator Audit
    # ------------------------------------------------------------------ #

    def audit_generator(
        self, options: GenerationOptions, samples: Optional[int] = None
    ) -> ScanResult:
        """Run the chi-squared distribution audit over generated output.

        Args:
            options: Generation constraints to audit.
            samples: Batch size; defaults to ``audit.samples``.

        Raises:
            ValueError: If *samples* is less than 1.
            NoCharacterClassSelected / EmptyFilteredClass: Invalid options.
            RandomUnavailable: No secure random source.
        """
        samples = self.config.audit.samples if samples is None else samples
        result = ScanResult(tool_name=TOOL_NAME, target=f"generator ({samples} samples)")

        with self.logger.operation("audit"), self.logger.timed("generator audit"):
            try:
                audit: GenerationAudit = self._auditor.audit(options, samples)
            except KeysmithError as exc:
                self.logger.error("Generator audit failed: %s", exc)
                raise

        result.metadata = audit.model_dump(mode="json")

        if audit.consistent:
            result.add_finding(Finding(
                severity=Severity.INFO,
                title="Character Distribution Consistent",
                description=(
                    f"Chi-squared {audit.chi_squared:.2f} with "
                    f"{audit.degrees_of_freedom} degrees of freedom "
                    f"(p = {audit.p_value:.4f}) is consistent with the sampling model."
                ),
                evidence={
                    "chi_squared": round(audit.chi_squared, 4),
                    "p_value": round(audit.p_value, 6),
                    "dof": audit.degrees_of_freedom,
                },
            ))
        else:
            result.add_finding(Finding(
                severity=Severity.HIGH,
                title="Character Distribution Deviates From Model",
                description=(
                    f"Chi-squared {audit.chi_squared:.2f} with "
                    f"{audit.degrees_of_freedom} degrees of freedom gives "
                    f"p = {audit.p_value:.6f}, below the {audit.significance} "
                    f"significance level."
                ),
                evidence={
                    "chi_squared": round(audit.chi_squared, 4),
                    "p_value": audit.p_value,
                    "dof": audit.degrees_of_freedom,
                },
                recommendation="Re-run with more samples and inspect the random source.",
            ))

        guaranteed = options.length >= len(options.selected_classes())
        if guaranteed and audit.class_coverage < 1.0:
            result.add_finding(Finding(
                severity=Severity.HIGH,
                title="Selected Character Class Missing",
                description=(
                    f"Only {audit.class_coverage:.2%} of samples contain every "
                    f"selected character class."
                ),
                evidence={"class_coverage": audit.class_coverage},
            ))

        if audit.foreign_characters:
            result.add_finding(Finding(
                severity=Severity.CRITICAL,
                title="Excluded Characters Generated",
                description=(
                    "Characters outside the filtered charset appeared in the output."
                ),
                evidence={"characters": audit.foreign_characters},
            ))

        verdict = "consistent" if audit.consistent else "inconsistent"
        return result.finalize(
            f"Audited {audit.samples} samples: distribution {verdict} "
            f"(p = {audit.p_value:.4f})"
        )

    # ------------------------------------------------------------------ #
    #  Severity Mapping
    # ------------------------------------------------------------------ #

    @staticmethod
    def _strength_severity(level: StrengthLevel) -> Severity:
        """Map a strength level to a finding severity."""
        mapping = {
            StrengthLevel.VERY_WEAK: Severity.CRITICAL,
            StrengthLevel.WEAK: Severity.HIGH,
            StrengthLevel.FAIR: Severity.MEDIUM,
            StrengthLevel.GOOD: Severity.LOW,
            StrengthLevel.STRONG: Severity.INFO,
            StrengthLevel.EXCELLENT: Severity.INFO,
        }
        return mapping.get(level, Severity.MEDIUM)

    @staticmethod
    def _recommendation_severity(kind: RecommendationType) -> Severity:
        mapping = {
            RecommendationType.CRITICAL: Severity.CRITICAL,
            RecommendationType.WARNING: Severity.MEDIUM,
            RecommendationType.INFO: Severity.INFO,
        }
        return mapping[kind]

    @staticmethod
    def _recommendation_description(kind: RecommendationType) -> str:
        if kind == RecommendationType.CRITICAL:
            return "The password matches a common or breached password format."
        if kind == RecommendationType.WARNING:
            return "The password contains a predictable pattern."
        return "The password could be made harder to guess."


def report_from_metadata(metadata: dict[str, Any]) -> StrengthReport:
    """Rebuild the strength report stored by :meth:`KeysmithEngine.check_password`."""
    if "report" in metadata:
        return ExtendedReport(**metadata).report
    return StrengthReport(**metadata)
