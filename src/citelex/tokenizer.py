"""Tokenizer: regex matches merged into a gap-free token stream.

``Tokenizer.tokenize`` runs every candidate extractor over the whole text,
orders the matches by start offset, drops matches that overlap a token
already emitted, and fills the gaps with word/space tokens split on the
space character. Subclasses only change which extractors are candidates:
the base class runs all of them, ``AhocorasickTokenizer`` asks the
prefilter.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import TypeAlias

from citelex.extractors import TokenExtractor, default_registry
from citelex.prefilter import Prefilter
from citelex.tokens import (
    IndexedTokens,
    MatchToken,
    SpaceToken,
    Token,
    Tokens,
    WordToken,
)

log = logging.getLogger(__name__)

MergeStrategy: TypeAlias = Callable[[MatchToken, MatchToken], MatchToken | None]


def never_merge(last: MatchToken, token: MatchToken) -> MatchToken | None:
    """Default merge strategy: duplicates are resolved by the overlap rule."""
    return None


def append_text(tokens: list[Token], text: str, offset: int) -> None:
    """Split text on spaces into word and space tokens and append them.

    Consecutive spaces each yield their own space token; no space token is
    emitted for the end of text. offset is the position of text in the
    original string.
    """
    pos = offset
    for part in text.split(" "):
        if part:
            end = pos + len(part)
            tokens.append(WordToken(part, pos, end))
            pos = end
        tokens.append(SpaceToken(" ", pos, pos + 1))
        pos += 1
    tokens.pop()  # remove final extra space


def _match_order(token: MatchToken) -> tuple[int, int]:
    # Longest match first among tokens starting at the same offset.
    return token.start, -token.end


class Tokenizer:
    """Tokenizer that tries every extractor on every text."""

    def __init__(
        self,
        extractors: Sequence[TokenExtractor],
        *,
        merge: MergeStrategy = never_merge,
    ) -> None:
        self.extractors = tuple(extractors)
        self.merge = merge

    def get_extractors(self, text: str) -> Iterable[TokenExtractor]:
        """Extractors that could match text. Subclasses narrow this down."""
        return self.extractors

    def extract_tokens(self, text: str) -> list[MatchToken]:
        """Raw tokens for every match of every candidate extractor."""
        return [
            extractor.get_token(match)
            for extractor in self.get_extractors(text)
            for match in extractor.get_matches(text)
        ]

    def tokenize(self, text: str) -> tuple[Tokens, IndexedTokens]:
        """Tokenize text into the full stream and the citation-relevant tokens.

        Returns:
        1. every token in order, with word/space tokens filling the gaps
        2. (index into the full stream, token) for each non word/space token
        """
        matches = sorted(self.extract_tokens(text), key=_match_order)
        all_tokens: Tokens = []
        citation_tokens: IndexedTokens = []
        last_token: MatchToken | None = None
        offset = 0

        for token in matches:
            if last_token is not None:
                # The same cite is sometimes matched by two different regexes.
                merged = self.merge(last_token, token)
                if merged is not None:
                    idx = citation_tokens[-1][0]
                    citation_tokens[-1] = (idx, merged)
                    all_tokens[idx] = merged
                    offset = max(offset, merged.end)
                    last_token = merged
                    continue

            if offset > token.start:
                continue  # overlaps a token already emitted
            if offset < token.start:
                append_text(all_tokens, text[offset:token.start], offset)

            citation_tokens.append((len(all_tokens), token))
            all_tokens.append(token)
            offset = token.end
            last_token = token

        if offset < len(text):
            append_text(all_tokens, text[offset:], offset)

        log.debug(
            "Tokenized %d chars: %d tokens, %d citation-relevant (%d raw matches)",
            len(text),
            len(all_tokens),
            len(citation_tokens),
            len(matches),
        )
        return all_tokens, citation_tokens


class AhocorasickTokenizer(Tokenizer):
    """Tokenizer that only runs extractors whose trigger strings occur."""

    def __init__(
        self,
        extractors: Sequence[TokenExtractor],
        *,
        merge: MergeStrategy = never_merge,
    ) -> None:
        super().__init__(extractors, merge=merge)
        self.prefilter = Prefilter(self.extractors)

    def get_extractors(self, text: str) -> Iterable[TokenExtractor]:
        return self.prefilter.candidates(text)


_DEFAULT_TOKENIZER: AhocorasickTokenizer | None = None
_DEFAULT_TOKENIZER_LOCK = threading.Lock()


def default_tokenizer() -> AhocorasickTokenizer:
    """Process-wide prefiltered tokenizer over the reporters-db registry."""
    global _DEFAULT_TOKENIZER
    if _DEFAULT_TOKENIZER is None:
        with _DEFAULT_TOKENIZER_LOCK:
            if _DEFAULT_TOKENIZER is None:
                _DEFAULT_TOKENIZER = AhocorasickTokenizer(default_registry().extractors)
    return _DEFAULT_TOKENIZER


def tokenize(text: str) -> tuple[Tokens, IndexedTokens]:
    """Tokenize text with the default tokenizer."""
    return default_tokenizer().tokenize(text)


def extract_tokens(text: str) -> list[MatchToken]:
    """Raw extractor matches for text from the default tokenizer."""
    return default_tokenizer().extract_tokens(text)
