"""
Digest Dispatcher
==================

Applies the salt, selects one or all supported algorithms, and returns
labeled lowercase-hex digests in request order.

The salt is appended to the text verbatim with no delimiter and no length
prefix. Different text/salt splits of the same string therefore produce
identical digests (``"ab" + "c"`` and ``"a" + "bc"``). Existing digests
depend on this layout, so it is kept as is; it is not a
sound salting scheme.

Empty text is the caller's concern: the dispatcher hashes whatever it is
given.
"""

from __future__ import annotations

from typing import Iterable, Union

from keyforge.core.models import AlgorithmId, DigestRequest, DigestResult, DigestRow
from keyforge.digest.md5 import Md5Engine
from keyforge.digest.provider import DigestProvider, HashlibDigestProvider

ALL = "all"

ALL_ALGORITHMS: tuple[AlgorithmId, ...] = (
    AlgorithmId.MD5,
    AlgorithmId.SHA1,
    AlgorithmId.SHA256,
    AlgorithmId.SHA512,
)

AlgorithmSelection = Union[str, AlgorithmId, Iterable[Union[str, AlgorithmId]]]


def expand_selection(selection: AlgorithmSelection) -> tuple[AlgorithmId, ...]:
    """Resolve a selection to an ordered, duplicate-free algorithm tuple.

    ``"all"`` expands to MD5, SHA1, SHA256, SHA512 in that order; a single
    name or :class:`AlgorithmId` yields a one-element tuple; an iterable
    keeps its own order.

    Raises:
        ValueError: On an unknown algorithm name or an empty selection.
    """
    if isinstance(selection, (str, AlgorithmId)):
        if not isinstance(selection, AlgorithmId) and selection.strip().lower() == ALL:
            return ALL_ALGORITHMS
        return (AlgorithmId.parse(selection),)

    algorithms = tuple(dict.fromkeys(AlgorithmId.parse(item) for item in selection))
    if not algorithms:
        raise ValueError("At least one digest algorithm must be selected")
    return algorithms


class DigestDispatcher:
    """Routes digest requests to MD5 or the platform SHA primitives.

    Usage::

        dispatcher = DigestDispatcher()
        dispatcher.compute("abc", "salt", "md5").pairs()
        # [('MD5', '...')]
    """

    def __init__(self, provider: DigestProvider | None = None) -> None:
        self._provider = provider or HashlibDigestProvider()

    def digest_hex(self, algorithm: AlgorithmId, data: bytes) -> str:
        """Lowercase hex digest of *data*, two hex digits per byte."""
        if algorithm is AlgorithmId.MD5:
            raw = Md5Engine(data).digest()
        else:
            raw = self._provider.digest(algorithm, data)
        return raw.hex()

    def dispatch(self, request: DigestRequest) -> DigestResult:
        """Compute every digest in *request*, in request order."""
        message = request.salted_message
        rows = [
            DigestRow(
                algorithm=algorithm,
                label=algorithm.label,
                hex=self.digest_hex(algorithm, message),
            )
            for algorithm in request.algorithms
        ]
        return DigestResult(rows=rows, salted=bool(request.salt))

    def compute(
        self,
        text: str,
        salt: str = "",
        selection: AlgorithmSelection = ALL,
    ) -> DigestResult:
        """Digest ``text + salt`` with the selected algorithms.

        Precondition: *text* is non-empty.
        """
        request = DigestRequest(
            message=text.encode("utf-8"),
            salt=salt.encode("utf-8"),
            algorithms=expand_selection(selection),
        )
        return self.dispatch(request)
