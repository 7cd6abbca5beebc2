"""
Platform Digest Provider
=========================

The SHA family is not reimplemented; it is delegated to a
:class:`DigestProvider`. The default provider wraps :mod:`hashlib`.
Tests inject their own provider to observe or replace the platform
primitive.

References:
    - NIST FIPS 180-4 (2015). Secure Hash Standard (SHS).
"""

from __future__ import annotations

import hashlib
from typing import Protocol

from keyforge.core.models import AlgorithmId


class DigestProvider(Protocol):
    """Capability that computes a raw digest of *data* for *algorithm*."""

    def digest(self, algorithm: AlgorithmId, data: bytes) -> bytes:
        ...


class HashlibDigestProvider:
    """:class:`DigestProvider` backed by Python's :mod:`hashlib`."""

    _HASHLIB_NAMES: dict[AlgorithmId, str] = {
        AlgorithmId.SHA1: "sha1",
        AlgorithmId.SHA256: "sha256",
        AlgorithmId.SHA512: "sha512",
    }

    def digest(self, algorithm: AlgorithmId, data: bytes) -> bytes:
        """Return the raw digest of *data*.

        Raises:
            ValueError: For algorithms this provider does not cover.
        """
        try:
            name = self._HASHLIB_NAMES[algorithm]
        except KeyError:
            raise ValueError(
                f"{algorithm!r} is not provided by the platform digest provider"
            ) from None
        return hashlib.new(name, data).digest()
