"""Static blog generator: a folder of dated Markdown entries in, a paginated site out."""

__version__ = "0.3.0"
