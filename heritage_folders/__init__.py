"""Heritage Folders - folder hierarchy engine for heritage site documents."""

__version__ = "1.0.0"
