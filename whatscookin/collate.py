from __future__ import annotations

import math
from functools import reduce
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from .entries import Entry
from .views import PageLink, TagReference

TagIndex = Mapping[str, Tuple[TagReference, ...]]


def sort_entries(entries: Sequence[Entry]) -> list[Entry]:
    """Newest first. Equal timestamps keep their load order."""
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)


def page_count(total: int, per_page: int) -> int:
    if per_page < 1:
        raise ValueError(f"entries per page must be positive, got {per_page}")
    return math.ceil(total / per_page)


def paginate(entries: Sequence[Entry], per_page: int) -> list[tuple[Entry, ...]]:
    total_pages = page_count(len(entries), per_page)
    return [tuple(entries[i * per_page : (i + 1) * per_page]) for i in range(total_pages)]


def page_name(number: int) -> str:
    return "home" if number == 0 else f"page {number}"


def page_url(number: int) -> str:
    return "index.html" if number == 0 else f"index{number}.html"


def page_links(total_pages: int) -> tuple[PageLink, ...]:
    return tuple(PageLink(page_name(n), page_url(n)) for n in range(total_pages))


def add_tag_references(index: dict, entry: Entry) -> dict:
    updated = dict(index)
    for tag in entry.tags:
        ref = TagReference(url=entry.url, title=entry.title, tag=tag)
        updated[tag] = updated.get(tag, ()) + (ref,)
    return updated


def build_tag_index(entries: Sequence[Entry]) -> TagIndex:
    """Fold the sorted entries into ``tag -> references``, keys ascending."""
    folded = reduce(add_tag_references, entries, {})
    return MappingProxyType({tag: folded[tag] for tag in sorted(folded)})
