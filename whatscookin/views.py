"""Data handed to each named template.

One frozen dataclass per template, so a missing field fails when the view is
built rather than halfway through rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PageLink:
    name: str
    url: str


@dataclass(frozen=True)
class TagReference:
    url: str
    title: str
    tag: str


@dataclass(frozen=True)
class EntryView:
    title: str
    html: str
    tags: tuple[str, ...]
    url: str
    link: str
    date: str
    created_at: str
    author: str
    description: str
    site_url: str
    hero_image: Optional[str] = None
    share_image: Optional[str] = None


@dataclass(frozen=True)
class IndexView:
    title: str
    description: str
    site_url: str
    page: int
    entries: tuple[EntryView, ...]
    pagination: tuple[PageLink, ...]
    build_year: str
    build_timestamp: str
    share_image: Optional[str] = None


@dataclass(frozen=True)
class TagListView:
    title: str
    site_url: str
    tags: Mapping[str, tuple[TagReference, ...]]
    build_year: str


@dataclass(frozen=True)
class FeedEntry:
    title: str
    description: str
    url: str
    link: str
    created_at: str
    author: str
    domain: str
    html: str


@dataclass(frozen=True)
class FeedView:
    title: str
    description: str
    site_url: str
    home_link: str
    self_link: str
    domain: str
    entries: tuple[FeedEntry, ...]
    build_timestamp: str
    build_date: str
    build_year: str


def as_context(view: Any) -> dict:
    """Top-level fields of a view as template variables, without deep-copying."""
    return {field.name: getattr(view, field.name) for field in fields(view)}
