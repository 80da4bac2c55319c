from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

import yaml

from .errors import ConfigError
from .utils import parse_int, site_domain

DEFAULT_ENTRIES_PER_PAGE = 20
DEFAULT_TRUNCATE_LENGTH = 300
DEFAULT_AUTHOR = "anonymous"
DEFAULT_TITLE = "What's Cookin'"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc.strerror}") from exc
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping: {path}")
    return data


@dataclass(frozen=True)
class SiteConfig:
    """Everything the build pipeline reads from configuration."""

    src: Optional[Path]
    dest: Optional[Path]
    url: str
    title: str = DEFAULT_TITLE
    template_dir: Optional[Path] = None
    entries_per_page: int = DEFAULT_ENTRIES_PER_PAGE
    truncate_length: int = DEFAULT_TRUNCATE_LENGTH
    description: str = ""
    author: str = DEFAULT_AUTHOR
    share_image: Optional[str] = None
    workers: int = 1

    @classmethod
    def from_mapping(cls, data: dict) -> "SiteConfig":
        def path_value(key: str) -> Optional[Path]:
            value = data.get(key)
            return Path(str(value)) if value else None

        def str_value(key: str, default: str) -> str:
            value = data.get(key)
            return default if value is None else str(value)

        return cls(
            src=path_value("src"),
            dest=path_value("dest"),
            url=str_value("url", "").strip(),
            title=str_value("title", DEFAULT_TITLE),
            template_dir=path_value("template_dir"),
            entries_per_page=parse_int(data.get("entries_per_page"), DEFAULT_ENTRIES_PER_PAGE),
            truncate_length=parse_int(data.get("truncate_length"), DEFAULT_TRUNCATE_LENGTH),
            description=str_value("description", ""),
            author=str_value("author", DEFAULT_AUTHOR) or DEFAULT_AUTHOR,
            share_image=data.get("share_image") or None,
            workers=parse_int(data.get("workers"), 1),
        )

    @property
    def domain(self) -> str:
        return site_domain(self.url)

    def validate(self) -> None:
        for key in ("src", "dest", "url"):
            if not getattr(self, key):
                raise ConfigError(f"Missing required value {key}")
        if self.entries_per_page < 1:
            raise ConfigError(f"entries_per_page must be positive, got {self.entries_per_page}")
        if self.truncate_length < 1:
            raise ConfigError(f"truncate_length must be positive, got {self.truncate_length}")
        if self.workers < 0:
            raise ConfigError(f"workers must not be negative, got {self.workers}")
        site_domain(self.url)
