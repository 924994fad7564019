"""Tests for the token data model."""
from __future__ import annotations

import dataclasses

import pytest

from citelex.tokens import (
    TOKEN_FACTORIES,
    CitationToken,
    MatchToken,
    SpaceToken,
    StopWordToken,
    TokenExtractorExtra,
    WordToken,
)


class TestTokenInvariants:
    def test_negative_start(self) -> None:
        with pytest.raises(ValueError, match="start must be >= 0"):
            WordToken("a", -1, 0)

    def test_end_before_start(self) -> None:
        with pytest.raises(ValueError, match="must be >= start"):
            WordToken("", 5, 4)

    def test_data_length_must_match_span(self) -> None:
        with pytest.raises(ValueError, match="does not match span"):
            CitationToken("410 U.S. 113", 0, 5)

    def test_frozen(self) -> None:
        token = WordToken("Roe", 4, 7)
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.start = 0  # type: ignore[misc]


class TestTokenKinds:
    def test_kind_tags(self) -> None:
        assert WordToken("a", 0, 1).kind == "word"
        assert SpaceToken(" ", 1, 2).kind == "space"
        assert CitationToken("x", 0, 1).kind == "citation"
        assert StopWordToken("v.", 0, 2).kind == "stop_word"

    def test_factories_cover_match_kinds(self) -> None:
        assert set(TOKEN_FACTORIES) == {"citation", "section", "supra", "id", "paragraph", "stop_word"}
        for kind, factory in TOKEN_FACTORIES.items():
            assert issubclass(factory, MatchToken)
            assert factory.kind == kind

    def test_citation_relevance(self) -> None:
        assert not WordToken("a", 0, 1).is_citation_relevant
        assert not SpaceToken(" ", 0, 1).is_citation_relevant
        assert CitationToken("x", 0, 1).is_citation_relevant

    def test_equality_depends_on_kind(self) -> None:
        assert WordToken("v", 0, 1) != StopWordToken("v", 0, 1)
        assert WordToken("v", 0, 1) == WordToken("v", 0, 1)

    def test_match_token_defaults(self) -> None:
        token = CitationToken("x", 0, 1)
        assert token.groups == {}
        assert token.extra == TokenExtractorExtra()
        assert token.extra.short is False


class TestTokenExtractorExtra:
    def test_all_editions_empty(self) -> None:
        assert TokenExtractorExtra().all_editions == ()
