"""
Keysmith Generators
====================

Secure random source, character classes and the constrained password
generator.
"""

from keysmith.generators.password import PasswordGenerator, generate
from keysmith.generators.random_source import SecureRandomSource

__all__ = [
    "PasswordGenerator",
    "SecureRandomSource",
    "generate",
]
