from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .collate import TagIndex, build_tag_index, page_links, paginate, sort_entries
from .config import (
    DEFAULT_AUTHOR,
    DEFAULT_ENTRIES_PER_PAGE,
    DEFAULT_TITLE,
    DEFAULT_TRUNCATE_LENGTH,
    SiteConfig,
    load_config,
)
from .entries import Entry, load_entries
from .errors import BuildError, DirectoryError
from .feed import build_feed
from .pages import build_entries, build_feed_page, build_index, build_tags, check_reserved_urls
from .templates import Renderer, TemplateRenderer
from .utils import parse_int
from .views import FeedView


@dataclass(frozen=True)
class BuildResult:
    entries: tuple[Entry, ...]
    pages: tuple[tuple[Entry, ...], ...]
    tags: TagIndex
    feed: FeedView
    written: tuple[Path, ...]


def resolve_workers(value: int) -> int:
    if value <= 0:
        value = os.cpu_count() or 1
    return max(1, min(value, 32))


def prepare_dest(dest: Path) -> None:
    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(dest, f"Unable to create destination directory ({exc.strerror})") from exc


def build_site(
    config: SiteConfig,
    renderer: Optional[Renderer] = None,
    now: Optional[dt.datetime] = None,
) -> BuildResult:
    """Run one full build: load, sort, paginate, then render every output file.

    ``now`` is the build clock; every timestamp in the output is derived from it.
    """
    config.validate()
    if now is None:
        now = dt.datetime.now().astimezone()
    src, dest = config.src, config.dest
    prepare_dest(dest)
    if renderer is None:
        renderer = TemplateRenderer(config.template_dir)

    loaded = load_entries(
        src,
        now,
        truncate_length=config.truncate_length,
        default_author=config.author,
        workers=resolve_workers(config.workers),
    )
    entries = sort_entries(loaded)
    pages = paginate(entries, config.entries_per_page)
    check_reserved_urls(entries, len(pages))
    if not pages:
        print(f"No entries found in {src}", file=sys.stderr)
    pagination = page_links(max(1, len(pages)))
    tags = build_tag_index(entries)
    feed = build_feed(pages[0] if pages else (), config, now)

    build_entries(renderer, dest, entries, config)
    written = [dest / entry.url for entry in entries]
    for number, page in enumerate(pages or [()]):
        written.append(build_index(renderer, dest, number, page, pagination, config, now))
    written.append(build_tags(renderer, dest, tags, config, now))
    written.append(build_feed_page(renderer, dest, feed))

    return BuildResult(
        entries=tuple(entries),
        pages=tuple(pages),
        tags=tags,
        feed=feed,
        written=tuple(written),
    )


def main(argv: Optional[list[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
    except BuildError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    def cfg_str(key: str, default: Optional[str]) -> Optional[str]:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_int(key: str, default: int) -> int:
        return parse_int(config.get(key), default)

    parser = argparse.ArgumentParser(prog="whatscookin", description="Static site blog generator.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "src",
        nargs="?",
        default=cfg_str("src", None),
        metavar="SRC_DIR",
        help="Directory where the Markdown entries live.",
    )
    parser.add_argument(
        "dest",
        nargs="?",
        default=cfg_str("dest", None),
        metavar="DEST_DIR",
        help="Destination directory for the generated site.",
    )
    parser.add_argument(
        "-e",
        "--entries",
        dest="entries_per_page",
        type=int,
        default=cfg_int("entries_per_page", DEFAULT_ENTRIES_PER_PAGE),
        help="How many entries on each index page.",
    )
    parser.add_argument(
        "-t",
        "--template-dir",
        default=cfg_str("template_dir", None),
        help="Location of page templates (defaults to the bundled ones).",
    )
    parser.add_argument("--title", default=cfg_str("title", DEFAULT_TITLE), help="Site title.")
    parser.add_argument("--url", default=cfg_str("url", ""), help="Public site URL, used for the feed.")
    parser.add_argument("--description", default=cfg_str("description", ""), help="Site description.")
    parser.add_argument("--author", default=cfg_str("author", DEFAULT_AUTHOR), help="Default entry author.")
    parser.add_argument("--share-image", default=cfg_str("share_image", None), help="Default share image URL.")
    parser.add_argument(
        "--truncate",
        dest="truncate_length",
        type=int,
        default=cfg_int("truncate_length", DEFAULT_TRUNCATE_LENGTH),
        help="Length of generated previews and feed descriptions.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=cfg_int("workers", 1),
        help="Number of worker threads for parsing entries (0 = auto).",
    )
    args = parser.parse_args(argv)

    site = SiteConfig.from_mapping(
        {
            "src": args.src,
            "dest": args.dest,
            "url": args.url,
            "title": args.title,
            "template_dir": args.template_dir,
            "entries_per_page": args.entries_per_page,
            "truncate_length": args.truncate_length,
            "description": args.description,
            "author": args.author,
            "share_image": args.share_image,
            "workers": args.workers,
        }
    )
    start = time.perf_counter()
    try:
        result = build_site(site)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Wrote {len(result.written)} files to {site.dest}")
