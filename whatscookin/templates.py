from __future__ import annotations

from importlib.resources import files
from pathlib import Path
from typing import Any, Optional, Protocol

import jinja2
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .errors import DirectoryError, TemplateNotFound, TemplateRenderError
from .views import as_context

ENTRY_TEMPLATE = "entry"
INDEX_TEMPLATE = "index"
TAG_LIST_TEMPLATE = "tag-list"
FEED_TEMPLATE = "atom"


class Renderer(Protocol):
    def render(self, name: str, view: Any) -> bytes: ...


def default_template_dir() -> Path:
    return Path(str(files("whatscookin").joinpath("templates")))


def template_name(path: Path) -> str:
    return path.name.split(".")[0]


class TemplateRenderer:
    """Renders views through Jinja2 templates registered by file stem.

    ``entry.html`` is registered as ``entry``, ``tag-list.html`` as ``tag-list``.
    """

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        if template_dir is None:
            template_dir = default_template_dir()
        if not template_dir.is_dir():
            raise DirectoryError(template_dir, "Template directory not found")
        self.template_dir = template_dir
        self.names = {
            template_name(path): path.name
            for path in sorted(template_dir.iterdir())
            if path.is_file() and not path.name.startswith(".")
        }
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "htm", "xml", "rss"]),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

    def render(self, name: str, view: Any) -> bytes:
        filename = self.names.get(name)
        if filename is None:
            raise TemplateNotFound(name, self.template_dir)
        try:
            template = self.env.get_template(filename)
            return template.render(**as_context(view)).encode("utf-8")
        except jinja2.TemplateNotFound as exc:
            raise TemplateNotFound(name, self.template_dir) from exc
        except jinja2.TemplateError as exc:
            raise TemplateRenderError(name, str(exc)) from exc
