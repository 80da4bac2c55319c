from __future__ import annotations

import datetime as dt
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .content import parse_front_matter
from .errors import DirectoryError, DuplicateURL, ParseError
from .render import render_markdown
from .utils import truncate_text

OUTPUT_SUFFIX = ".html"


@dataclass(frozen=True)
class Entry:
    created_at: dt.datetime
    rendered_at: dt.datetime
    title: str
    tags: tuple[str, ...]
    url: str
    html: str
    plain_text: str
    truncated_text: str
    author: str
    source: str
    description: Optional[str] = None
    hero_image: Optional[str] = None
    share_image: Optional[str] = None


def entry_url(path: Path) -> str:
    return Path(path.name).with_suffix(OUTPUT_SUFFIX).name


def list_sources(src: Path) -> list[Path]:
    """Regular files directly inside ``src``, in filename order."""
    if not src.is_dir():
        raise DirectoryError(src, "Source directory not found")
    try:
        children = sorted(src.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise DirectoryError(src, f"Source directory unreadable ({exc.strerror})") from exc
    files = []
    for path in children:
        if not path.is_file():
            continue
        if path.name.startswith("."):
            print(f"Skipping hidden file {path}", file=sys.stderr)
            continue
        files.append(path)
    return files


def parse_entry(
    path: Path, now: dt.datetime, truncate_length: int, default_author: str
) -> Entry:
    source = str(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(source, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise ParseError(source, f"unreadable ({exc.strerror})") from exc

    meta, body = parse_front_matter(raw_text, source)
    html_content, plain_text = render_markdown(body)
    print(f"Parsed {path} as {meta.title}")
    return Entry(
        created_at=meta.date,
        rendered_at=now,
        title=meta.title,
        tags=meta.tags,
        url=entry_url(path),
        html=html_content,
        plain_text=plain_text,
        truncated_text=truncate_text(plain_text, truncate_length),
        author=meta.author or default_author,
        source=source,
        description=meta.description,
        hero_image=meta.hero_image,
        share_image=meta.share_image,
    )


def check_unique_urls(entries: list[Entry]) -> None:
    seen: dict[str, Entry] = {}
    for entry in entries:
        if entry.url in seen:
            raise DuplicateURL(entry.url, seen[entry.url].source, entry.source)
        seen[entry.url] = entry


def load_entries(
    src: Path,
    now: dt.datetime,
    truncate_length: int = 300,
    default_author: str = "anonymous",
    workers: int = 1,
) -> list[Entry]:
    """Load every entry in ``src``.

    The first file that fails to parse aborts the load with an error naming it.
    Entries come back in load (filename) order.
    """
    files = list_sources(src)

    def load(path: Path) -> Entry:
        return parse_entry(path, now, truncate_length, default_author)

    workers = max(1, int(workers or 1))
    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(files))) as executor:
            entries = list(executor.map(load, files))
    else:
        entries = [load(path) for path in files]

    check_unique_urls(entries)
    return entries
