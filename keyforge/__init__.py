"""
KeyForge -- Constrained Secret Generator and Digest Workbench
==============================================================

Generates random secrets under composition constraints (length, enabled
character classes, per-class minimums, ambiguous-character exclusion)
and computes MD5 / SHA-1 / SHA-256 / SHA-512 digests of text under an
optional salt.

Modules:
    - keyforge.generator: Unbiased sampling, character classes, planning,
      assembly and strength scoring
    - keyforge.digest: From-scratch MD5 and the digest dispatcher
    - keyforge.analyzers: Runtime self-test suite
    - keyforge.core.engine: Central orchestrator
    - keyforge.core.models: Pydantic data models
    - keyforge.output: Console and report output
    - keyforge.cli: Click-based command-line interface

References:
    - Rivest, R. (1992). RFC 1321: The MD5 Message-Digest Algorithm.
    - NIST FIPS 180-4 (2015). Secure Hash Standard (SHS).
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

__version__ = "1.0.0"
__tool_name__ = "keyforge"
