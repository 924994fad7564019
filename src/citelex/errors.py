"""Build-time errors raised while compiling patterns and the prefilter.

None of these are recoverable: an engine whose pattern set cannot be built
cannot tokenize safely, so callers should let them propagate.
"""
from __future__ import annotations


class TokenizerBuildError(RuntimeError):
    """Base class for failures while building the extractor registry."""


class TemplateCycleError(TokenizerBuildError):
    """Raised when a regex template transitively references itself."""

    def __init__(self, path: list[str]) -> None:
        self.path = tuple(path)
        super().__init__(f"Circular template reference: {' -> '.join(path)}")


class UnknownTemplateError(TokenizerBuildError):
    """Raised when a template references a name that is not defined."""

    def __init__(self, name: str, referenced_from: str | None = None) -> None:
        self.name = name
        self.referenced_from = referenced_from
        where = f" (referenced from ${referenced_from})" if referenced_from else ""
        super().__init__(f"Undefined template: ${name}{where}")


class ShortFormDerivationError(TokenizerBuildError):
    """Raised when a full-cite pattern lacks the reporter/page anchor groups."""


class PatternCompilationError(TokenizerBuildError):
    """Raised when a resolved pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid regex ({reason}): {pattern[:200]}")


class AutomatonBuildError(TokenizerBuildError):
    """Raised when the multi-pattern prefilter automaton cannot be built."""
