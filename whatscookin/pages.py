from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Sequence

from .collate import TagIndex, page_url
from .config import SiteConfig
from .entries import Entry
from .errors import DuplicateURL
from .feed import FEED_FILENAME
from .render import write_bytes
from .templates import ENTRY_TEMPLATE, FEED_TEMPLATE, INDEX_TEMPLATE, TAG_LIST_TEMPLATE, Renderer
from .utils import display_date, join_url, rfc3339_date
from .views import EntryView, FeedView, IndexView, PageLink, TagListView

TAGS_FILENAME = "tags.html"


def entry_view(entry: Entry, config: SiteConfig) -> EntryView:
    description = entry.description or entry.truncated_text
    return EntryView(
        title=entry.title,
        html=entry.html,
        tags=entry.tags,
        url=entry.url,
        link=join_url(config.url, entry.url),
        date=display_date(entry.created_at),
        created_at=rfc3339_date(entry.created_at),
        author=entry.author,
        description=description,
        site_url=config.url,
        hero_image=entry.hero_image,
        share_image=entry.share_image or config.share_image,
    )


def build_entries(
    renderer: Renderer, dest: Path, entries: Sequence[Entry], config: SiteConfig
) -> None:
    for entry in entries:
        output = dest / entry.url
        print(f"Writing {entry.title} to {output}")
        write_bytes(output, renderer.render(ENTRY_TEMPLATE, entry_view(entry, config)))


def build_index(
    renderer: Renderer,
    dest: Path,
    number: int,
    entries: Sequence[Entry],
    pagination: tuple[PageLink, ...],
    config: SiteConfig,
    now: dt.datetime,
) -> Path:
    view = IndexView(
        title=config.title,
        description=config.description,
        site_url=config.url,
        page=number,
        entries=tuple(entry_view(entry, config) for entry in entries),
        pagination=pagination,
        build_year=str(now.year),
        build_timestamp=rfc3339_date(now),
        share_image=config.share_image,
    )
    output = dest / page_url(number)
    print(f"Writing page {number} to {output}")
    write_bytes(output, renderer.render(INDEX_TEMPLATE, view))
    return output


def build_tags(
    renderer: Renderer, dest: Path, tags: TagIndex, config: SiteConfig, now: dt.datetime
) -> Path:
    view = TagListView(title=config.title, site_url=config.url, tags=tags, build_year=str(now.year))
    output = dest / TAGS_FILENAME
    print(f"Writing tags to {output}")
    write_bytes(output, renderer.render(TAG_LIST_TEMPLATE, view))
    return output


def build_feed_page(renderer: Renderer, dest: Path, feed: FeedView) -> Path:
    output = dest / FEED_FILENAME
    print(f"Writing feed to {output}")
    write_bytes(output, renderer.render(FEED_TEMPLATE, feed))
    return output


def check_reserved_urls(entries: Sequence[Entry], total_pages: int) -> None:
    """Entry pages must not share a filename with the index, tag or feed pages."""
    reserved = {page_url(number) for number in range(max(1, total_pages))}
    reserved.update({TAGS_FILENAME, FEED_FILENAME})
    for entry in entries:
        if entry.url in reserved:
            raise DuplicateURL(entry.url, entry.source, "a generated site page")
