"""
KeyForge Digest
================

From-scratch MD5 and a uniform dispatcher over MD5, SHA-1, SHA-256 and
SHA-512.
"""

from keyforge.digest.dispatcher import (
    ALL,
    ALL_ALGORITHMS,
    DigestDispatcher,
    expand_selection,
)
from keyforge.digest.md5 import Md5Engine, md5_hexdigest
from keyforge.digest.provider import DigestProvider, HashlibDigestProvider

__all__ = [
    "ALL",
    "ALL_ALGORITHMS",
    "DigestDispatcher",
    "DigestProvider",
    "HashlibDigestProvider",
    "Md5Engine",
    "expand_selection",
    "md5_hexdigest",
]
