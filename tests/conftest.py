"""Shared fixtures: a small hand-written reference dataset and its registry."""
from __future__ import annotations

from typing import Any

import pytest

from citelex.editions import ReferenceDataset
from citelex.extractors import ExtractorRegistry, build_extractor_registry
from citelex.tokenizer import AhocorasickTokenizer

RAW_REGEX_VARIABLES: dict[str, Any] = {
    "volume": {"": r"(?P<volume>\d+)"},
    "reporter": {"": "(?P<reporter>$edition)"},
    "page": {"": r"(?P<page>\d+)"},
    "full_cite": {"": "$volume $reporter $page"},
    "law": {"section": r"(?P<section>\d+)"},
    "notes#": "comment entries are ignored, even with $undefined references",
}

REPORTERS: dict[str, Any] = {
    "U.S.": [
        {
            "name": "United States Supreme Court Reports",
            "cite_type": "federal",
            "editions": {"U.S.": {"start": "1875-01-01T00:00:00", "end": None}},
            "variations": {"U. S.": "U.S.", "U.S": "U.S."},
        },
    ],
    "F.": [
        {
            "name": "Federal Reporter",
            "cite_type": "federal",
            "editions": {
                "F.": {"start": "1880-01-01T00:00:00", "end": "1924-12-31T00:00:00"},
                "F.2d": {"start": "1924-01-01T00:00:00", "end": "1993-12-31T00:00:00"},
            },
            "variations": {"F. 2d": "F.2d"},
        },
    ],
    "Ill.": [
        {
            "name": "Illinois Reports",
            "cite_type": "state",
            "editions": {"Ill.": {"start": "1819-01-01T00:00:00", "end": "1884-12-31T00:00:00"}},
            "variations": {},
        },
        {
            "name": "Illinois Supreme Court Reports",
            "cite_type": "state",
            "editions": {"Ill.": {"start": "1885-01-01T00:00:00", "end": None}},
            "variations": {},
        },
    ],
    "Tex. Sup. Ct. J.": [
        {
            "name": "Texas Supreme Court Journal",
            "cite_type": "state",
            "editions": {
                "Tex. Sup. Ct. J.": {
                    "start": "1957-01-01T00:00:00",
                    "end": None,
                    "regexes": [r"(?P<volume>\d+) Tex\. ?Sup\. ?Ct\. ?J\. (?P<page>\d+)"],
                },
            },
            "variations": {},
        },
    ],
}

LAWS: dict[str, Any] = {
    "Stat.": [
        {
            "name": "United States Statutes at Large",
            "cite_type": "leg_session",
            "start": "1789-01-01T00:00:00",
            "end": None,
            "regexes": ["$volume $reporter $law_section"],
            "variations": ["Stat"],
        },
    ],
}

JOURNALS: dict[str, Any] = {
    "Harv. L. Rev.": [
        {
            "name": "Harvard Law Review",
            "cite_type": "journal",
            "start": "1887-01-01T00:00:00",
            "end": None,
            "regexes": ["$full_cite"],
            "variations": [],
        },
    ],
}


def make_dataset(**overrides: Any) -> ReferenceDataset:
    fields: dict[str, Any] = {
        "reporters": REPORTERS,
        "laws": LAWS,
        "journals": JOURNALS,
        "raw_regex_variables": RAW_REGEX_VARIABLES,
    }
    fields.update(overrides)
    return ReferenceDataset(**fields)


@pytest.fixture(scope="session")
def tiny_dataset() -> ReferenceDataset:
    return make_dataset()


@pytest.fixture(scope="session")
def tiny_registry(tiny_dataset: ReferenceDataset) -> ExtractorRegistry:
    return build_extractor_registry(tiny_dataset)


@pytest.fixture(scope="session")
def tiny_tokenizer(tiny_registry: ExtractorRegistry) -> AhocorasickTokenizer:
    return AhocorasickTokenizer(tiny_registry.extractors)


@pytest.fixture()
def dataset_factory() -> Any:
    """Build a variant of the tiny dataset with some fields replaced."""
    return make_dataset
