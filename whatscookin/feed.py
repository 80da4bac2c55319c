from __future__ import annotations

import datetime as dt
from typing import Sequence

from .config import SiteConfig
from .entries import Entry
from .utils import join_url, rfc3339_date, truncate_text
from .views import FeedEntry, FeedView

FEED_FILENAME = "index.rss"


def feed_description(entry: Entry, truncate_length: int) -> str:
    if entry.description:
        return entry.description
    return truncate_text(entry.plain_text, truncate_length)


def build_feed(latest: Sequence[Entry], config: SiteConfig, now: dt.datetime) -> FeedView:
    """Feed of the first page of entries, i.e. the most recent ones."""
    domain = config.domain
    items = tuple(
        FeedEntry(
            title=entry.title,
            description=feed_description(entry, config.truncate_length),
            url=entry.url,
            link=join_url(config.url, entry.url),
            created_at=rfc3339_date(entry.created_at),
            author=entry.author,
            domain=domain,
            html=entry.html,
        )
        for entry in latest
    )
    return FeedView(
        title=config.title,
        description=config.description,
        site_url=config.url,
        home_link=join_url(config.url, "") + "/",
        self_link=join_url(config.url, FEED_FILENAME),
        domain=domain,
        entries=items,
        build_timestamp=rfc3339_date(now),
        build_date=now.strftime("%Y-%m-%d"),
        build_year=str(now.year),
    )
