"""bibfix: CLI tool to fix bib-files exported by Mendeley Desktop."""

try:
    from importlib.metadata import version

    __version__ = version("bibfix")
except Exception:  # pragma: no cover
    __version__ = "0.0.0.dev0"
