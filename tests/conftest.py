from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Optional

import pytest

from whatscookin.config import SiteConfig

NOW = dt.datetime(2024, 3, 1, 12, 0, 0, tzinfo=dt.timezone.utc)


def write_entry(
    directory: Path,
    name: str,
    title: str,
    date: str,
    body: str = "Some text.",
    **fields: str,
) -> Path:
    lines = ["---", f"title: {title}", f"date: {date}"]
    lines.extend(f"{key}: {value}" for key, value in fields.items())
    lines.extend(["---", "", body])
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class FakeRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def render(self, name: str, view: Any) -> bytes:
        self.calls.append((name, view))
        return name.encode("utf-8")

    def views(self, name: str) -> list[Any]:
        return [view for called, view in self.calls if called == name]


@pytest.fixture
def now() -> dt.datetime:
    return NOW


@pytest.fixture
def src(tmp_path: Path) -> Path:
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture
def make_config(src: Path, dest: Path):
    def factory(template_dir: Optional[Path] = None, **overrides: Any) -> SiteConfig:
        values = {
            "src": src,
            "dest": dest,
            "url": "https://blog.example.com",
            "title": "Test Kitchen",
            "template_dir": template_dir,
            "entries_per_page": 2,
            "description": "Recipes and notes",
        }
        values.update(overrides)
        return SiteConfig(**values)

    return factory
