"""Named, ordered task logs stored as flat files."""

__version__ = "0.1.0"
