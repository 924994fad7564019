"""Token data model shared by the extractors and the tokenizer.

Tokens are a closed set of kinds. ``WordToken`` and ``SpaceToken`` are plain
text filler; every other kind is a ``MatchToken`` produced by an extractor and
carries the extractor's metadata plus the named capture groups of its match.

Offsets are half-open character offsets into the exact string passed to
``tokenize``; ``data`` is always ``text[start:end]``. Tokens are only
meaningful alongside that string.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Literal, TypeAlias

from citelex.editions import Edition

TokenKind: TypeAlias = Literal[
    "word",
    "space",
    "citation",
    "section",
    "supra",
    "id",
    "paragraph",
    "stop_word",
]
MatchTokenKind: TypeAlias = Literal["citation", "section", "supra", "id", "paragraph", "stop_word"]


@dataclass(frozen=True, slots=True)
class TokenExtractorExtra:
    """Edition metadata attached to an extractor and shared by its tokens."""

    exact_editions: tuple[Edition, ...] = ()
    variation_editions: tuple[Edition, ...] = ()
    short: bool = False

    @property
    def all_editions(self) -> tuple[Edition, ...]:
        return self.exact_editions + self.variation_editions


NO_EXTRA = TokenExtractorExtra()


@dataclass(frozen=True, slots=True)
class Token:
    """Base token: a span of the input text."""

    kind: ClassVar[TokenKind]

    data: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must be >= start ({self.start})")
        if len(self.data) != self.end - self.start:
            raise ValueError(
                f"data length {len(self.data)} does not match span {self.start}:{self.end}",
            )

    @property
    def is_citation_relevant(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class WordToken(Token):
    """A run of non-space text between matches."""

    kind: ClassVar[TokenKind] = "word"


@dataclass(frozen=True, slots=True)
class SpaceToken(Token):
    """A single space separator."""

    kind: ClassVar[TokenKind] = "space"


@dataclass(frozen=True, slots=True)
class MatchToken(Token):
    """A token produced by an extractor's regex match."""

    extra: TokenExtractorExtra = NO_EXTRA
    groups: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_citation_relevant(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class CitationToken(MatchToken):
    """String matching a citation regex from the reference dataset."""

    kind: ClassVar[TokenKind] = "citation"


@dataclass(frozen=True, slots=True)
class SectionToken(MatchToken):
    """Word containing a section symbol."""

    kind: ClassVar[TokenKind] = "section"


@dataclass(frozen=True, slots=True)
class SupraToken(MatchToken):
    """Word matching "supra" with or without punctuation."""

    kind: ClassVar[TokenKind] = "supra"


@dataclass(frozen=True, slots=True)
class IdToken(MatchToken):
    """Word matching "id" or "ibid"."""

    kind: ClassVar[TokenKind] = "id"


@dataclass(frozen=True, slots=True)
class ParagraphToken(MatchToken):
    """A newline marking a break between paragraphs."""

    kind: ClassVar[TokenKind] = "paragraph"


@dataclass(frozen=True, slots=True)
class StopWordToken(MatchToken):
    """Word matching one of the case-name stop words."""

    kind: ClassVar[TokenKind] = "stop_word"


TOKEN_FACTORIES: dict[MatchTokenKind, type[MatchToken]] = {
    "citation": CitationToken,
    "section": SectionToken,
    "supra": SupraToken,
    "id": IdToken,
    "paragraph": ParagraphToken,
    "stop_word": StopWordToken,
}

Tokens: TypeAlias = list[Token]
IndexedTokens: TypeAlias = list[tuple[int, MatchToken]]
