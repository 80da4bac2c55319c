from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class BuildError(Exception):
    """Base class for every error that stops a build."""


class ConfigError(BuildError):
    pass


class InvalidBaseURL(ConfigError):
    def __init__(self, url: str):
        super().__init__(f"Base URL has no host: {url!r}")
        self.url = url


class DirectoryError(BuildError):
    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = Path(path)


class ParseError(BuildError):
    def __init__(self, source: PathLike, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = str(source)
        self.reason = reason


class MalformedPreamble(ParseError):
    pass


class MissingField(ParseError):
    def __init__(self, source: PathLike, field: str):
        super().__init__(source, f"missing required field '{field}'")
        self.field = field


class DateParseError(ParseError):
    def __init__(self, source: PathLike, value: str):
        super().__init__(source, f"unable to parse {value!r} as an RFC 3339 date")
        self.value = value


class DuplicateURL(BuildError):
    def __init__(self, url: str, first: PathLike, second: PathLike):
        super().__init__(f"{first} and {second} both render to {url}")
        self.url = url


class TemplateError(BuildError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"template '{name}': {reason}")
        self.name = name


class TemplateNotFound(TemplateError):
    def __init__(self, name: str, search_path: Optional[PathLike] = None):
        where = f" in {search_path}" if search_path is not None else ""
        super().__init__(name, f"not found{where}")


class TemplateRenderError(TemplateError):
    pass


class WriteError(BuildError):
    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"Unable to write {path}: {reason}")
        self.path = Path(path)
