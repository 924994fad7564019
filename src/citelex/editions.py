"""Reference dataset adapter: reporters, laws and journals.

The reference dataset (``reporters-db``) is read-only input. This module
wraps the raw JSON-shaped mappings into frozen ``Reporter``/``Edition``
records and lets tests inject a small hand-written dataset instead of the
full one.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, TypeAlias

SourceKind: TypeAlias = Literal["reporters", "laws", "journals"]


@dataclass(frozen=True, slots=True)
class Reporter:
    """A publication series: a case reporter, a law code or a journal."""

    short_name: str
    name: str
    cite_type: str
    source: SourceKind


@dataclass(frozen=True, slots=True)
class Edition:
    """One numbering scheme of a reporter, with its validity window."""

    short_name: str
    reporter: Reporter
    start: datetime | None
    end: datetime | None
    regexes: tuple[str, ...] | None = None

    def includes_year(self, year: int) -> bool:
        """True if year falls inside the edition's validity window."""
        if self.start is not None and year < self.start.year:
            return False
        if self.end is not None and year > self.end.year:
            return False
        return True


def coerce_datetime(value: Any) -> datetime | None:
    """Accept datetimes, dates, ISO strings or None from the dataset."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True, slots=True)
class EditionSource:
    """An edition plus everything needed to generate its patterns."""

    edition: Edition
    names: tuple[str, ...]
    variations: tuple[str, ...]
    templates: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ReferenceDataset:
    """Raw reporters/laws/journals mappings and regex template variables."""

    reporters: Mapping[str, Any]
    laws: Mapping[str, Any]
    journals: Mapping[str, Any]
    raw_regex_variables: Mapping[str, Any]

    @classmethod
    def from_reporters_db(cls) -> ReferenceDataset:
        """Load the dataset shipped with the ``reporters-db`` package."""
        import reporters_db

        return cls(
            reporters=reporters_db.REPORTERS,
            laws=reporters_db.LAWS,
            journals=reporters_db.JOURNALS,
            raw_regex_variables=reporters_db.RAW_REGEX_VARIABLES,
        )

    def iter_edition_sources(self) -> Iterator[EditionSource]:
        """Yield one EditionSource per reporter edition, law and journal.

        Reporter editions default to the ``$full_cite`` template; laws and
        journals only contribute the templates they declare.
        """
        for key, cluster in self.reporters.items():
            for source in cluster:
                reporter = Reporter(
                    short_name=key,
                    name=source.get("name", key),
                    cite_type=source.get("cite_type", ""),
                    source="reporters",
                )
                variations: Mapping[str, str] = source.get("variations") or {}
                for edition_name, edition_data in source["editions"].items():
                    declared = edition_data.get("regexes")
                    edition = Edition(
                        short_name=edition_name,
                        reporter=reporter,
                        start=coerce_datetime(edition_data.get("start")),
                        end=coerce_datetime(edition_data.get("end")),
                        regexes=tuple(declared) if declared else None,
                    )
                    yield EditionSource(
                        edition=edition,
                        names=(edition_name,),
                        variations=tuple(
                            variation
                            for variation, target in variations.items()
                            if target == edition_name
                        ),
                        templates=edition.regexes or ("$full_cite",),
                    )

        for kind, table in (("laws", self.laws), ("journals", self.journals)):
            for key, cluster in table.items():
                for source in cluster:
                    declared = tuple(source.get("regexes") or ())
                    edition = Edition(
                        short_name=key,
                        reporter=Reporter(
                            short_name=key,
                            name=source.get("name", key),
                            cite_type=source.get("cite_type", ""),
                            source=kind,
                        ),
                        start=coerce_datetime(source.get("start")),
                        end=coerce_datetime(source.get("end")),
                        regexes=declared or None,
                    )
                    yield EditionSource(
                        edition=edition,
                        names=(key,),
                        variations=tuple(source.get("variations") or ()),
                        templates=declared,
                    )
