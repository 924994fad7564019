"""Token extractors and the extractor registry.

A ``TokenExtractor`` pairs one compiled regex with the token kind it emits,
the edition metadata its tokens carry, and the literal trigger strings the
prefilter looks for. The registry holds one extractor per distinct citation
pattern generated from the reference dataset, followed by the fixed
id/supra/paragraph/stop word/section extractors.

Registry construction is deterministic for a given dataset and is the only
place patterns are compiled; every extractor is frozen afterwards.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from citelex.editions import Edition, ReferenceDataset
from citelex.patterns import (
    FULL_CITE_TEMPLATE,
    ID_REGEX,
    ID_STRINGS,
    PAGE_REGEX,
    PARAGRAPH_REGEX,
    SECTION_REGEX,
    SECTION_SYMBOL,
    STOP_WORD_REGEX,
    STOP_WORDS,
    SUPRA_REGEX,
    SUPRA_STRINGS,
    has_short_cite_form,
    nonalphanum_boundaries_re,
    short_cite_re,
)
from citelex.templates import (
    RegexTemplate,
    ResolvedRegex,
    flatten_variables,
    recursive_substitute,
    resolve_variables,
    substitute_edition,
)
from citelex.tokens import (
    NO_EXTRA,
    TOKEN_FACTORIES,
    MatchToken,
    MatchTokenKind,
    TokenExtractorExtra,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class TokenExtractor:
    """One compiled pattern and the token kind its matches become.

    The token text is capture group 1 of ``regex``; named groups that
    participate in a match are copied onto the token.
    """

    regex: ResolvedRegex
    token_kind: MatchTokenKind
    extra: TokenExtractorExtra = NO_EXTRA
    strings: frozenset[str] = frozenset()
    ignore_case: bool = False
    compiled: re.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.token_kind not in TOKEN_FACTORIES:
            raise ValueError(f"Unknown token kind: {self.token_kind!r}")
        if any(not s for s in self.strings):
            raise ValueError("Trigger strings cannot be empty")
        compiled = self.regex.compile(ignore_case=self.ignore_case)
        if compiled.groups < 1:
            raise ValueError(f"Extractor regex needs a token capture group: {self.regex.value}")
        object.__setattr__(self, "compiled", compiled)

    def get_matches(self, text: str) -> Iterator[re.Match[str]]:
        """Return match objects for all matches in text."""
        return self.compiled.finditer(text)

    def get_token(self, match: re.Match[str]) -> MatchToken:
        """For a given match object, return a token of this extractor's kind."""
        start, end = match.span(1)
        groups = {name: value for name, value in match.groupdict().items() if value is not None}
        return TOKEN_FACTORIES[self.token_kind](
            data=match.group(1),
            start=start,
            end=end,
            extra=self.extra,
            groups=groups,
        )


@dataclass(frozen=True, slots=True)
class ExtractorRegistry:
    """All extractors plus a reporter string -> editions lookup."""

    extractors: tuple[TokenExtractor, ...]
    editions_lookup: Mapping[str, tuple[Edition, ...]]

    def __len__(self) -> int:
        return len(self.extractors)

    def __iter__(self) -> Iterator[TokenExtractor]:
        return iter(self.extractors)

    def citation_extractors(self) -> list[TokenExtractor]:
        return [e for e in self.extractors if e.token_kind == "citation"]


# ---------------------------------------------------------------------------
# Registry construction
# ---------------------------------------------------------------------------

_EditionKind: TypeAlias = Literal["editions", "variations"]


@dataclass(slots=True)
class _RegexLookup:
    """Editions accumulated for one generated pattern."""

    # Exact matches: a "U\.S\." pattern lists editions whose name is "U.S."
    editions: list[Edition] = field(default_factory=list)
    # Variants: a "U\.\ S\." pattern lists editions that have "U. S." as a variation
    variations: list[Edition] = field(default_factory=list)
    # Strings a text must contain for this pattern to match
    strings: set[str] = field(default_factory=set)
    short: bool = False

    def add_edition(self, kind: _EditionKind, edition: Edition) -> None:
        target = self.editions if kind == "editions" else self.variations
        if edition not in target:
            target.append(edition)


def _override_base(raw: dict[str, Any], name: str, value: str) -> None:
    """Replace the base ("" key) template of a raw variable."""
    current = raw.get(name)
    if isinstance(current, Mapping):
        nested = dict(current)
        nested[""] = value
        raw[name] = nested
    else:
        raw[name] = value


def _add_regex(
    lookups: dict[str, _RegexLookup],
    kind: _EditionKind,
    names: tuple[str, ...],
    edition: Edition,
    regex: ResolvedRegex,
) -> None:
    """Record regex (and its short form, if any) for edition."""
    have_strings = re.escape(names[0]) in regex.value

    lookup = lookups.setdefault(regex.value, _RegexLookup())
    lookup.add_edition(kind, edition)
    if have_strings:
        lookup.strings.update(names)

    if has_short_cite_form(regex.value):
        short = lookups.setdefault(short_cite_re(regex.value), _RegexLookup())
        short.add_edition(kind, edition)
        short.short = True
        if have_strings:
            short.strings.update(names)


def _fixed_extractors() -> list[TokenExtractor]:
    return [
        TokenExtractor(
            ResolvedRegex(ID_REGEX),
            "id",
            strings=frozenset(ID_STRINGS),
            ignore_case=True,
        ),
        TokenExtractor(
            ResolvedRegex(SUPRA_REGEX),
            "supra",
            strings=frozenset(SUPRA_STRINGS),
            ignore_case=True,
        ),
        TokenExtractor(ResolvedRegex(PARAGRAPH_REGEX), "paragraph"),
        TokenExtractor(
            ResolvedRegex(STOP_WORD_REGEX),
            "stop_word",
            strings=frozenset(STOP_WORDS),
            ignore_case=True,
        ),
        TokenExtractor(
            ResolvedRegex(SECTION_REGEX),
            "section",
            strings=frozenset({SECTION_SYMBOL}),
        ),
    ]


def build_extractor_registry(
    dataset: ReferenceDataset | None = None,
    *,
    full_cite_template: str = FULL_CITE_TEMPLATE,
    page_template: str = PAGE_REGEX,
) -> ExtractorRegistry:
    """Compile every citation pattern in dataset into an ExtractorRegistry.

    For each edition and each of its templates this generates the exact-name
    pattern and its short form, plus the variation-name pair when the edition
    has historical variations. Patterns that come out textually identical are
    merged into one extractor carrying the union of their editions.

    Raises:
        TemplateCycleError, UnknownTemplateError: broken template variables.
        PatternCompilationError: a generated pattern is not a valid regex.
    """
    started = time.perf_counter()
    data = dataset if dataset is not None else ReferenceDataset.from_reporters_db()

    raw = dict(data.raw_regex_variables)
    _override_base(raw, "full_cite", full_cite_template)
    _override_base(raw, "page", page_template)
    variables = resolve_variables(flatten_variables(raw))

    lookups: dict[str, _RegexLookup] = {}
    editions_lookup: dict[str, list[Edition]] = {}
    edition_count = 0
    for source in data.iter_edition_sources():
        edition_count += 1
        for name in (*source.names, *source.variations):
            bucket = editions_lookup.setdefault(name, [])
            if source.edition not in bucket:
                bucket.append(source.edition)

        for template in source.templates:
            resolved: RegexTemplate = recursive_substitute(template, variables)
            regex = substitute_edition(resolved, source.names).resolved()
            _add_regex(lookups, "editions", source.names, source.edition, regex)
            if source.variations:
                variation_regex = substitute_edition(resolved, source.variations).resolved()
                _add_regex(
                    lookups, "variations", source.variations, source.edition, variation_regex,
                )

    extractors = [
        TokenExtractor(
            ResolvedRegex(nonalphanum_boundaries_re(pattern)),
            "citation",
            extra=TokenExtractorExtra(
                exact_editions=tuple(lookup.editions),
                variation_editions=tuple(lookup.variations),
                short=lookup.short,
            ),
            strings=frozenset(lookup.strings),
        )
        for pattern, lookup in lookups.items()
    ]
    extractors.extend(_fixed_extractors())

    log.info(
        "Built %d extractors from %d editions (%d distinct citation patterns) in %.2fs",
        len(extractors),
        edition_count,
        len(lookups),
        time.perf_counter() - started,
    )
    return ExtractorRegistry(
        extractors=tuple(extractors),
        editions_lookup={name: tuple(eds) for name, eds in editions_lookup.items()},
    )


_DEFAULT_REGISTRY: ExtractorRegistry | None = None
_DEFAULT_REGISTRY_LOCK = threading.Lock()


def default_registry() -> ExtractorRegistry:
    """Process-wide registry built from reporters-db on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        with _DEFAULT_REGISTRY_LOCK:
            if _DEFAULT_REGISTRY is None:
                _DEFAULT_REGISTRY = build_extractor_registry()
    return _DEFAULT_REGISTRY
