"""A terminal note list with spaces and a history of checked notes."""

__version__ = "0.1.0"
__all__ = ["cli", "notes", "spaces", "store"]