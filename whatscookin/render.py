from __future__ import annotations

import html
import re
from pathlib import Path

import markdown

from .errors import WriteError

TAG_RE = re.compile(r"<[^>]+>")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "smarty", "codehilite"]
MARKDOWN_CONFIGS = {"codehilite": {"guess_lang": False, "css_class": "codehilite"}}


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def render_markdown(source: str) -> tuple[str, str]:
    """Render a Markdown body to ``(html, plain_text)``.

    Raw HTML in the source is passed through untouched; entry authors are
    trusted. ``plain_text`` is only used for previews and feed descriptions.
    """
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, extension_configs=MARKDOWN_CONFIGS)
    html_content = md.convert(source)
    plain_text = html.unescape(strip_tags(html_content)).strip()
    return html_content, plain_text


def write_bytes(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc
