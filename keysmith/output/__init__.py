"""
Keysmith Output Module
=======================

Console display and report generation for Keysmith results.
"""

from keysmith.output.console import KeysmithConsoleOutput, mask_password
from keysmith.output.report import KeysmithReportGenerator

__all__ = [
    "KeysmithConsoleOutput",
    "KeysmithReportGenerator",
    "mask_password",
]
