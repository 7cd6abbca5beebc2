"""
KeyForge Output Module
=======================

Console display and report generation for KeyForge results.
"""

from keyforge.output.console import KeyForgeConsoleOutput
from keyforge.output.report import KeyForgeReportGenerator

__all__ = [
    "KeyForgeConsoleOutput",
    "KeyForgeReportGenerator",
]
