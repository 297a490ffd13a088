"""
Keysmith Configuration Management
==================================

Centralized configuration for the Keysmith password toolkit using
Python dataclasses and TOML-based persistence.

Each tool section maps onto one ``[table]`` of the TOML file; missing
tables and keys fall back to the dataclass defaults below.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]

if TYPE_CHECKING:
    from keysmith.core.models import GenerationOptions


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "keysmith.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Default generation options and batch settings.

    ``history_size`` bounds the in-memory :class:`PasswordHistory` kept
    by the CLI for a single invocation.
    """

    length: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False
    exclude_ambiguous: bool = False
    batch_count: int = 5
    history_size: int = 10

    def to_options(self, **overrides: Any) -> GenerationOptions:
        """Build :class:`GenerationOptions` from these defaults.

        Keyword arguments whose value is ``None`` are ignored, so CLI
        flags that were not given keep the configured default.
        """
        from keysmith.core.models import GenerationOptions

        values: dict[str, Any] = {
            "length": self.length,
            "include_uppercase": self.include_uppercase,
            "include_lowercase": self.include_lowercase,
            "include_numbers": self.include_numbers,
            "include_symbols": self.include_symbols,
            "exclude_similar": self.exclude_similar,
            "exclude_ambiguous": self.exclude_ambiguous,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationOptions(**values)


@dataclass(frozen=False, slots=True)
class AnalyzerConfig:
    """Strength analysis settings."""

    low_entropy_threshold: float = 50.0
    mask_passwords: bool = True


@dataclass(frozen=False, slots=True)
class AuditConfig:
    """Settings for the generator distribution audit.

    Reference:
        Pearson, K. (1900). On the criterion that a given system of
        deviations from the probable ... Philosophical Magazine, 50(302).
    """

    samples: int = 1000
    significance: float = 0.01


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, output directory, debug mode."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False
    output_dir: str = "output"
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class KeysmithConfig:
    """Master configuration aggregating all sections.

    Usage:
        >>> config = KeysmithConfig.load()                 # from default path
        >>> config = KeysmithConfig.load("custom.toml")    # from custom path
        >>> config.generator.length
        16
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> KeysmithConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``keysmith.toml`` in
        the project root and silently uses defaults when it is absent.

        Raises:
            FileNotFoundError: If an explicitly given *path* does not exist.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            analyzer=cls._build_section(AnalyzerConfig, raw.get("analyzer", {})),
            audit=cls._build_section(AuditConfig, raw.get("audit", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* from the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def get_config(path: str | Path | None = None) -> KeysmithConfig:
    """Cached wrapper around :meth:`KeysmithConfig.load`."""
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = KeysmithConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
