from __future__ import annotations

from pathlib import Path

import pytest

from conftest import NOW, write_entry
from whatscookin.entries import entry_url, list_sources, load_entries
from whatscookin.errors import DateParseError, DirectoryError, DuplicateURL, MalformedPreamble, ParseError


def test_load_entries_builds_records(src: Path) -> None:
    write_entry(
        src,
        "pie.md",
        "Apple pie",
        "2021-05-07T00:00:00-07:00",
        body="Slice *thin*.",
        tags="baking, fruit",
        description="Autumn.",
    )

    (entry,) = load_entries(src, NOW, default_author="Site Owner")

    assert entry.title == "Apple pie"
    assert entry.url == "pie.html"
    assert entry.tags == ("baking", "fruit")
    assert entry.rendered_at == NOW
    assert entry.author == "Site Owner"
    assert entry.description == "Autumn."
    assert "<em>thin</em>" in entry.html
    assert entry.plain_text == "Slice thin."
    assert entry.truncated_text == "Slice thin."
    assert entry.source == str(src / "pie.md")


def test_entry_author_overrides_default(src: Path) -> None:
    write_entry(src, "a.md", "A", "2021-01-01T00:00:00Z", author="Guest")

    (entry,) = load_entries(src, NOW, default_author="Site Owner")

    assert entry.author == "Guest"


def test_truncated_text_uses_configured_length(src: Path) -> None:
    write_entry(src, "a.md", "A", "2021-01-01T00:00:00Z", body="one two three four five")

    (entry,) = load_entries(src, NOW, truncate_length=9)

    assert entry.truncated_text == "one two"


def test_list_sources_skips_directories_and_hidden_files(src: Path, capsys) -> None:
    (src / "nested").mkdir()
    write_entry(src / "nested", "deep.md", "Deep", "2021-01-01T00:00:00Z")
    (src / ".DS_Store").write_bytes(b"\x00")
    write_entry(src, "b.md", "B", "2021-01-01T00:00:00Z")
    write_entry(src, "a.md", "A", "2021-01-01T00:00:00Z")

    assert [path.name for path in list_sources(src)] == ["a.md", "b.md"]
    assert ".DS_Store" in capsys.readouterr().err


def test_missing_source_directory(tmp_path: Path) -> None:
    with pytest.raises(DirectoryError):
        load_entries(tmp_path / "nope", NOW)


@pytest.mark.parametrize("workers", [1, 4])
def test_first_bad_entry_aborts_the_load(src: Path, workers: int) -> None:
    write_entry(src, "a.md", "A", "2021-01-01T00:00:00Z")
    (src / "b.md").write_text("just some text\n", encoding="utf-8")
    write_entry(src, "c.md", "C", "2021-01-02T00:00:00Z")

    with pytest.raises(MalformedPreamble) as excinfo:
        load_entries(src, NOW, workers=workers)

    assert str(src / "b.md") in str(excinfo.value)


def test_bad_date_aborts_the_load(src: Path) -> None:
    write_entry(src, "a.md", "A", "yesterday")

    with pytest.raises(DateParseError) as excinfo:
        load_entries(src, NOW)

    assert "yesterday" in str(excinfo.value)
    assert "a.md" in str(excinfo.value)


def test_undecodable_file_is_a_parse_error(src: Path) -> None:
    (src / "binary.md").write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(ParseError) as excinfo:
        load_entries(src, NOW)

    assert "binary.md" in str(excinfo.value)


def test_duplicate_urls_are_rejected(src: Path) -> None:
    write_entry(src, "soup.md", "Soup", "2021-01-01T00:00:00Z")
    write_entry(src, "soup.markdown", "Soup again", "2021-01-02T00:00:00Z")

    with pytest.raises(DuplicateURL) as excinfo:
        load_entries(src, NOW)

    assert excinfo.value.url == "soup.html"


def test_parallel_load_keeps_filename_order(src: Path) -> None:
    for i in range(6):
        write_entry(src, f"{i}.md", f"Entry {i}", f"2021-01-0{i + 1}T00:00:00Z")

    entries = load_entries(src, NOW, workers=3)

    assert [entry.url for entry in entries] == [f"{i}.html" for i in range(6)]


@pytest.mark.parametrize(
    "name, url",
    [("post.md", "post.html"), ("notes", "notes.html"), ("v1.2.md", "v1.2.html")],
)
def test_entry_url(name: str, url: str) -> None:
    assert entry_url(Path("/src") / name) == url
