"""JSON and JSONL I/O for token streams.

Token streams are persisted as plain records (kind, data, span, groups and
the short names of matching editions) so they can be diffed, snapshot-tested
or handed to another process. Serialization goes through orjson.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from citelex.tokens import IndexedTokens, MatchToken, Token


def token_to_dict(token: Token, *, index: int | None = None) -> dict[str, Any]:
    """Convert a token into a JSON-safe record."""
    record: dict[str, Any] = {
        "kind": token.kind,
        "data": token.data,
        "start": token.start,
        "end": token.end,
    }
    if index is not None:
        record["index"] = index
    if isinstance(token, MatchToken):
        record["groups"] = dict(sorted(token.groups.items()))
        record["short"] = token.extra.short
        record["exact_editions"] = [e.short_name for e in token.extra.exact_editions]
        record["variation_editions"] = [e.short_name for e in token.extra.variation_editions]
    return record


def tokens_to_records(
    tokens: list[Token],
    citation_tokens: IndexedTokens | None = None,
) -> dict[str, list[dict[str, Any]]]:
    """Serialize the output of ``tokenize`` into one JSON-safe payload."""
    return {
        "tokens": [token_to_dict(t) for t in tokens],
        "citation_tokens": [
            token_to_dict(t, index=idx) for idx, t in (citation_tokens or [])
        ],
    }


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON with sorted keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def load_jsonl(path: Path) -> list[dict[str, Any]]:
    """Load a JSON Lines file (one JSON object per line). Blank lines skipped."""
    records: list[dict[str, Any]] = []
    for line in path.read_bytes().split(b"\n"):
        line = line.strip()
        if line:
            records.append(orjson.loads(line))
    return records


def save_jsonl(records: list[dict[str, Any]], path: Path) -> None:
    """Save a list of dicts as a JSON Lines file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [orjson.dumps(r, option=orjson.OPT_SORT_KEYS) for r in records]
    path.write_bytes(b"\n".join(lines) + b"\n" if lines else b"")
