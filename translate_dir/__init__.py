"""translate-dir: keep translated copies of a source directory in sync."""

__version__ = "0.1.0"
