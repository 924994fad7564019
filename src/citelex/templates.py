"""Regex template compiler for reporter citation patterns.

Templates are regex fragments with ``$name`` placeholders (``string.Template``
syntax) that reference other named templates, e.g. the reference dataset's
``full_cite`` template ``$volume $reporter,? $page``. Compilation runs in
three steps:

1. ``flatten_variables`` turns the nested variable mapping into flat names
   (``{"page": {"": A, "3_4": B}}`` -> ``page``, ``page_3_4``).
2. ``resolve_variables`` substitutes every placeholder recursively, leaving
   deferred names (``$edition``) in place for the per-edition step.
3. ``substitute_edition`` fills ``$edition`` with an alternation of escaped
   reporter names, after which ``RegexTemplate.resolved`` yields a literal
   ``ResolvedRegex``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from string import Template
from typing import Any

from citelex.errors import (
    PatternCompilationError,
    TemplateCycleError,
    UnknownTemplateError,
)

EDITION_PLACEHOLDER = "edition"

# Keys ending in this marker are comments in the reference dataset.
_COMMENT_SUFFIX = "#"


@dataclass(frozen=True, slots=True)
class ResolvedRegex:
    """A fully substituted pattern string with no placeholders left."""

    value: str

    def compile(self, *, ignore_case: bool = False) -> re.Pattern[str]:
        """Compile the pattern, raising PatternCompilationError if invalid."""
        flags = re.IGNORECASE if ignore_case else 0
        try:
            return re.compile(self.value, flags)
        except re.error as exc:
            raise PatternCompilationError(self.value, str(exc)) from exc


@dataclass(frozen=True, slots=True)
class RegexTemplate:
    """A regex fragment that may still contain ``$name`` placeholders."""

    value: str

    def identifiers(self) -> list[str]:
        """Placeholder names in order of first appearance."""
        return Template(self.value).get_identifiers()

    def substitute(self, mapping: Mapping[str, str]) -> RegexTemplate:
        """Replace the placeholders present in mapping; leave the rest."""
        return RegexTemplate(Template(self.value).safe_substitute(mapping))

    def is_resolved(self) -> bool:
        return not self.identifiers()

    def resolved(self) -> ResolvedRegex:
        """Return the literal pattern, or raise if a placeholder survives."""
        remaining = self.identifiers()
        if remaining:
            raise UnknownTemplateError(remaining[0])
        return ResolvedRegex(self.value)


def flatten_variables(raw: Mapping[str, Any]) -> dict[str, str]:
    """Flatten nested template variables and add ``_optional`` variants.

    Nested keys are joined with ``_``; an empty key maps to its parent name.
    Keys ending in ``#`` are comments and are dropped. For every variable
    ``k`` an optional variant ``k_optional`` = ``(?:<k> ?)?`` is added unless
    the dataset already defines one.
    """

    def _walk(node: Mapping[str, Any], parent: str, out: dict[str, str]) -> None:
        for key, value in node.items():
            if key.endswith(_COMMENT_SUFFIX):
                continue
            name = "_".join(part for part in (parent, key) if part)
            if isinstance(value, Mapping):
                _walk(value, name, out)
            else:
                out[name] = str(value)

    flat: dict[str, str] = {}
    _walk(raw, "", flat)
    for name, value in list(flat.items()):
        flat.setdefault(f"{name}_optional", f"(?:{value} ?)?")
    return flat


def resolve_variables(
    variables: Mapping[str, str],
    *,
    deferred: Iterable[str] = (EDITION_PLACEHOLDER,),
) -> dict[str, RegexTemplate]:
    """Resolve every variable by recursive substitution.

    Deferred names are left as placeholders. Unused variables are resolved
    too, so a broken entry anywhere in the mapping surfaces here.

    Raises:
        TemplateCycleError: a variable transitively references itself.
        UnknownTemplateError: a referenced name is not defined.
    """
    deferred_names = frozenset(deferred)
    resolved: dict[str, RegexTemplate] = {}
    stack: list[str] = []

    def _resolve(name: str) -> RegexTemplate:
        done = resolved.get(name)
        if done is not None:
            return done
        if name in stack:
            raise TemplateCycleError([*stack, name])
        if name not in variables:
            raise UnknownTemplateError(name, stack[-1] if stack else None)

        stack.append(name)
        try:
            template = RegexTemplate(variables[name])
            refs = {
                ref: _resolve(ref).value
                for ref in template.identifiers()
                if ref not in deferred_names
            }
            result = template.substitute(refs)
        finally:
            stack.pop()
        resolved[name] = result
        return result

    for name in variables:
        _resolve(name)
    return resolved


def recursive_substitute(
    template: str | RegexTemplate,
    variables: Mapping[str, RegexTemplate],
    *,
    deferred: Iterable[str] = (EDITION_PLACEHOLDER,),
) -> RegexTemplate:
    """Resolve one template against already-resolved variables."""
    tmpl = template if isinstance(template, RegexTemplate) else RegexTemplate(template)
    deferred_names = frozenset(deferred)
    refs: dict[str, str] = {}
    for ref in tmpl.identifiers():
        if ref in deferred_names:
            continue
        value = variables.get(ref)
        if value is None:
            raise UnknownTemplateError(ref)
        refs[ref] = value.value
    return tmpl.substitute(refs)


def substitute_edition(template: RegexTemplate, edition_names: Iterable[str]) -> RegexTemplate:
    """Replace ``$edition`` with an alternation of escaped edition names."""
    alternation = "|".join(re.escape(name) for name in edition_names)
    return template.substitute({EDITION_PLACEHOLDER: alternation})
