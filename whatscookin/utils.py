from __future__ import annotations

import datetime as dt
from urllib.parse import urlsplit

from .errors import InvalidBaseURL


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def site_domain(url: str) -> str:
    host = urlsplit(url.strip()).hostname if url else None
    if not host:
        raise InvalidBaseURL(url)
    return host


def rfc3339_date(value: dt.datetime) -> str:
    return value.isoformat()


def display_date(value: dt.datetime) -> str:
    return f"{value:%A, %b} {value.day}, {value.year}"


def truncate_text(text: str, max_len: int) -> str:
    """Shorten ``text`` to about ``max_len`` characters on a whitespace boundary.

    The cut lands on whichever whitespace is nearest to ``max_len``; on a tie the
    earlier one wins. With no whitespace at all the text is cut at ``max_len``.
    """
    if len(text) <= max_len:
        return text
    if text[max_len].isspace():
        return text[:max_len]

    before = None
    for i in range(max_len - 1, -1, -1):
        if text[i].isspace():
            before = i
            break
    after = None
    for i in range(max_len + 1, len(text)):
        if text[i].isspace():
            after = i
            break

    if before is None and after is None:
        cut = max_len
    elif after is None:
        cut = before
    elif before is None:
        cut = after
    else:
        cut = before if max_len - before <= after - max_len else after
    return text[:cut]
