"""Tests for the digest dispatcher."""

from __future__ import annotations

import hashlib

import pytest

from keyforge.core.models import AlgorithmId, DigestRequest
from keyforge.digest.dispatcher import ALL_ALGORITHMS, DigestDispatcher, expand_selection
from keyforge.digest.provider import HashlibDigestProvider


@pytest.fixture
def dispatcher(recording_provider) -> DigestDispatcher:
    return DigestDispatcher(recording_provider)


def test_all_algorithms_in_order(dispatcher):
    result = dispatcher.compute("abc")
    assert [label for label, _ in result.pairs()] == ["MD5", "SHA1", "SHA256", "SHA512"]
    expected = [hashlib.new(a.value, b"abc").hexdigest() for a in ALL_ALGORITHMS]
    assert [value for _, value in result.pairs()] == expected
    assert not result.salted


def test_hex_is_lowercase(dispatcher):
    for row in dispatcher.compute("Hello").rows:
        assert row.hex == row.hex.lower()
        assert all(ch in "0123456789abcdef" for ch in row.hex)


def test_salt_is_appended_without_delimiter(dispatcher):
    salted = dispatcher.compute("ab", "c")
    assert salted.salted
    assert salted.pairs() == dispatcher.compute("abc").pairs()
    assert salted.pairs() == dispatcher.compute("a", "bc").pairs()


def test_single_algorithm(dispatcher):
    result = dispatcher.compute("abc", selection="sha256")
    assert result.pairs() == [("SHA256", hashlib.sha256(b"abc").hexdigest())]


def test_md5_never_reaches_provider(dispatcher, recording_provider):
    dispatcher.compute("abc", selection=AlgorithmId.MD5)
    assert recording_provider.calls == []
    dispatcher.compute("abc", "salt", selection="all")
    assert [call[0] for call in recording_provider.calls] == [
        AlgorithmId.SHA1,
        AlgorithmId.SHA256,
        AlgorithmId.SHA512,
    ]
    assert all(data == b"abcsalt" for _, data in recording_provider.calls)


def test_dispatch_request(dispatcher):
    request = DigestRequest(
        message=b"msg", salt=b"!", algorithms=(AlgorithmId.SHA1, AlgorithmId.MD5)
    )
    result = dispatcher.dispatch(request)
    assert result.pairs() == [
        ("SHA1", hashlib.sha1(b"msg!").hexdigest()),
        ("MD5", hashlib.md5(b"msg!").hexdigest()),
    ]


class TestExpandSelection:
    def test_all(self):
        assert expand_selection("all") == ALL_ALGORITHMS
        assert expand_selection(" ALL ") == ALL_ALGORITHMS

    @pytest.mark.parametrize("name", ["sha256", "SHA-256", "sha_256", AlgorithmId.SHA256])
    def test_aliases(self, name):
        assert expand_selection(name) == (AlgorithmId.SHA256,)

    def test_iterable_keeps_order_and_drops_duplicates(self):
        assert expand_selection(["sha512", "md5", "SHA512"]) == (
            AlgorithmId.SHA512,
            AlgorithmId.MD5,
        )

    @pytest.mark.parametrize("bad", ["sha3", "crc32", ""])
    def test_unknown(self, bad):
        with pytest.raises(ValueError):
            expand_selection(bad)

    def test_empty_iterable(self):
        with pytest.raises(ValueError):
            expand_selection([])


def test_hashlib_provider_rejects_md5():
    with pytest.raises(ValueError):
        HashlibDigestProvider().digest(AlgorithmId.MD5, b"x")


def test_md5_with_salt(dispatcher):
    result = dispatcher.compute("abc", "salt", selection=[AlgorithmId.MD5])
    assert result.pairs() == [("MD5", hashlib.md5(b"abcsalt").hexdigest())]
