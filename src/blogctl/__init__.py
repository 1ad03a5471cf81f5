"""blogctl: URL routing, indexing and path enumeration for date-named blog posts."""

__version__ = "0.1.0"
