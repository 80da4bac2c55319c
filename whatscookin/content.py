from __future__ import annotations

import datetime as dt
import re
import sys
from dataclasses import dataclass
from typing import Optional

from .errors import DateParseError, MalformedPreamble, MissingField

HEADER_DELIMITER = "---"
RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)
LIST_ITEM_RE = re.compile(r"^-\s*(?P<item>.*)$")
LIST_KEYS = {"tags"}


@dataclass(frozen=True)
class FrontMatter:
    date: dt.datetime
    title: str
    tags: tuple[str, ...] = ()
    hero_image: Optional[str] = None
    share_image: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None


def parse_list(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value]
        return [item for item in items if item]
    value = str(value).strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_date(value: str, source: str = "<string>") -> dt.datetime:
    """Parse an RFC 3339 timestamp. Naive or otherwise shaped values are rejected."""
    match = RFC3339_RE.match(value.strip())
    if not match:
        raise DateParseError(source, value)
    frac = (match.group("frac") or "")[:6].ljust(6, "0")
    offset = match.group("offset")
    if offset in {"Z", "z"}:
        offset = "+00:00"
    normalized = f"{match.group('date')}T{match.group('time')}.{frac}{offset}"
    try:
        return dt.datetime.fromisoformat(normalized)
    except ValueError:
        raise DateParseError(source, value) from None


def split_preamble(text: str, source: str = "<string>") -> tuple[list[str], str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    separators = [i for i, line in enumerate(lines) if line.strip() == HEADER_DELIMITER][:2]
    if len(separators) < 2:
        raise MalformedPreamble(source, f"expected two '{HEADER_DELIMITER}' lines around the preamble")
    start, end = separators
    if any(line.strip() for line in lines[:start]):
        print(f"Ignoring text before the preamble in {source}", file=sys.stderr)
    body = "\n".join(lines[end + 1 :])
    return lines[start + 1 : end], body


def parse_meta(lines: list[str]) -> dict:
    meta: dict = {}
    list_key = None
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        item = LIST_ITEM_RE.match(line)
        if item and list_key is not None:
            meta[list_key].append(item.group("item").strip().strip("'\""))
            continue
        list_key = None
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip().lower().replace("-", "_")
        value = value.strip()
        if key in LIST_KEYS:
            meta[key] = parse_list(value)
            if not value:
                # values continue as "- item" lines
                list_key = key
        else:
            meta[key] = value
    return meta


def parse_front_matter(text: str, source: str = "<string>") -> tuple[FrontMatter, str]:
    lines, body = split_preamble(text, source)
    meta = parse_meta(lines)

    date_value = meta.get("date") or ""
    if not date_value:
        raise MissingField(source, "date")
    title = meta.get("title") or ""
    if not title:
        raise MissingField(source, "title")

    def optional(key: str) -> Optional[str]:
        return meta.get(key) or None

    front_matter = FrontMatter(
        date=parse_date(date_value, source),
        title=title,
        tags=tuple(parse_list(meta.get("tags") or [])),
        hero_image=optional("hero_image"),
        share_image=optional("share_image"),
        author=optional("author"),
        description=optional("description"),
    )
    return front_matter, body
