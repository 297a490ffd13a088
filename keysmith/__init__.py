"""
Keysmith -- Password Generator & Strength Checker
==================================================

Generates random passwords from configurable character classes using
the operating system's CSPRNG, and scores password strength with
transparent heuristics plus optional weak-pattern detection.

Library usage::

    import keysmith
    from keysmith.core.models import GenerationOptions

    pw = keysmith.generate(GenerationOptions(length=20))
    report = keysmith.analyze(pw)
    extended = keysmith.analyze_extended("password123")

Modules:
    - keysmith.generators: Random source, character classes, generator
    - keysmith.analyzers: Strength, pattern, extended and audit analyzers
    - keysmith.core: Engine facade, models, errors, instrumentation
    - keysmith.output: Console and report output
    - keysmith.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - NIST SP 800-90A Rev. 1 (2015). Recommendation for Random Number
      Generation Using Deterministic Random Bit Generators.
"""

from keysmith.analyzers.extended import analyze_extended
from keysmith.analyzers.strength import analyze
from keysmith.generators.password import generate

__version__ = "1.0.0"
__tool_name__ = "keysmith"

__all__ = ["analyze", "analyze_extended", "generate"]
