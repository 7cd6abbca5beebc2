"""
KeyForge Analyzers
===================

Runtime verification of the generator and digest pipeline.
"""

from keyforge.analyzers.selftest import SelfTester

__all__ = ["SelfTester"]
