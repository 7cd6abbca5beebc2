"""
KeyForge Shared Module
======================

Configuration, structured logging, console presentation and statistics
helpers shared by the KeyForge generator and digest tools.
"""

from shared.config import ForgeConfig

__all__ = ["ForgeConfig"]
