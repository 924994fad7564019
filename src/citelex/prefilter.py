"""Multi-pattern prefilter that picks which extractors to run on a text.

One Aho-Corasick automaton is built over the trigger strings of all
case-sensitive extractors and a second over the case-folded trigger strings
of the case-insensitive ones. A trigger hit only proves a substring is
present; the candidate's regex still decides whether a token matches.

Extractors that register no trigger strings are always candidates, so the
prefilter never hides a match the regex would have found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import ahocorasick

from citelex.errors import AutomatonBuildError
from citelex.extractors import TokenExtractor

log = logging.getLogger(__name__)


def _build_automaton(index: dict[str, list[int]]) -> ahocorasick.Automaton | None:
    if not index:
        return None
    automaton = ahocorasick.Automaton()
    try:
        for literal, extractor_ids in index.items():
            automaton.add_word(literal, tuple(extractor_ids))
        automaton.make_automaton()
    except Exception as exc:
        raise AutomatonBuildError(f"Failed to build prefilter automaton: {exc}") from exc
    return automaton


class Prefilter:
    """Maps trigger strings found in a text to candidate extractors."""

    def __init__(self, extractors: Sequence[TokenExtractor]) -> None:
        self._extractors = tuple(extractors)
        sensitive: dict[str, list[int]] = {}
        insensitive: dict[str, list[int]] = {}
        always: list[int] = []

        for idx, extractor in enumerate(self._extractors):
            if not extractor.strings:
                always.append(idx)
                continue
            for literal in sorted(extractor.strings):
                if extractor.ignore_case:
                    insensitive.setdefault(literal.casefold(), []).append(idx)
                else:
                    sensitive.setdefault(literal, []).append(idx)

        self._always = tuple(always)
        self._sensitive = _build_automaton(sensitive)
        self._insensitive = _build_automaton(insensitive)
        self.trigger_count = len(sensitive) + len(insensitive)
        log.info(
            "Built prefilter: %d trigger strings (%d case-insensitive), %d always-run extractors",
            self.trigger_count,
            len(insensitive),
            len(always),
        )

    @property
    def extractors(self) -> tuple[TokenExtractor, ...]:
        return self._extractors

    def hits(self, text: str) -> Iterable[tuple[int, tuple[int, ...]]]:
        """Yield (end_offset, extractor ids) per trigger occurrence.

        Case-sensitive hits come first, each automaton in increasing end
        offset. Offsets of case-insensitive hits refer to the case-folded text.
        """
        if self._sensitive is not None:
            yield from self._sensitive.iter(text)
        if self._insensitive is not None:
            yield from self._insensitive.iter(text.casefold())

    def candidate_ids(self, text: str) -> list[int]:
        """Sorted, de-duplicated ids of extractors worth running on text."""
        found = set(self._always)
        for _, extractor_ids in self.hits(text):
            found.update(extractor_ids)
        return sorted(found)

    def candidates(self, text: str) -> list[TokenExtractor]:
        """Extractors worth running on text, in registry order."""
        return [self._extractors[idx] for idx in self.candidate_ids(text)]
