"""notesearch - TF-IDF search over a directory of plain-text notes."""

__version__ = "0.1.0"
