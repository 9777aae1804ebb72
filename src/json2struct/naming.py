from __future__ import annotations

import re
from typing import Iterable

IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_SEGMENT_SPLIT_RE = re.compile(r"[\W_]+")


def is_identifier(value: str) -> bool:
    return IDENTIFIER_RE.fullmatch(value) is not None


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def to_display_name(key: str) -> str:
    """Derive an exported Go identifier from a JSON key.

    Underscores (and any other non-word characters) separate segments; empty
    segments are dropped and each remaining one gets an upper-cased first
    character. Returns ``""`` when nothing is left, so the caller can pick a
    sentinel.
    """
    parts = [p for p in _SEGMENT_SPLIT_RE.split(key) if p]
    name = "".join(_capitalize(p) for p in parts)
    if name[:1].isdigit():
        return f"Field{name}"
    return name


def to_type_name(candidate: str, fallback: str) -> str:
    name = _capitalize(candidate)
    return name or fallback


def next_free_name(base: str, existing: Iterable[str]) -> str:
    taken = set(existing)
    name = base
    counter = 2
    while name in taken:
        name = f"{base}{counter}"
        counter += 1
    return name
