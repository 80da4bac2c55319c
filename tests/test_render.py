from __future__ import annotations

import pytest

from whatscookin.errors import WriteError
from whatscookin.render import render_markdown, strip_tags, write_bytes


def test_render_markdown_returns_html_and_plain_text() -> None:
    html, plain = render_markdown("# Title\n\nSome *emphasis* & more.")

    assert "<h1>Title</h1>" in html
    assert "<em>emphasis</em>" in html
    assert "<" not in plain
    assert "Some emphasis & more." in plain


def test_raw_html_passes_through() -> None:
    html, plain = render_markdown('<div class="note">trusted</div>\n\ntext')

    assert '<div class="note">trusted</div>' in html
    assert "trusted" in plain


def test_fenced_code_is_rendered() -> None:
    html, _ = render_markdown("```python\nprint('hi')\n```\n")

    assert "codehilite" in html


def test_render_markdown_is_repeatable() -> None:
    assert render_markdown("a **b**") == render_markdown("a **b**")


def test_strip_tags() -> None:
    assert strip_tags("<p>a <b>b</b></p>") == "a b"


def test_write_bytes_reports_path(tmp_path) -> None:
    target = tmp_path / "missing" / "out.html"

    with pytest.raises(WriteError) as excinfo:
        write_bytes(target, b"data")

    assert excinfo.value.path == target
    assert str(target) in str(excinfo.value)
