"""Typed exceptions for page storage and viewer state."""


class PageRestoreError(Exception):
    """Base class for page restore errors."""


class StorageReadError(PageRestoreError):
    """Raised when the backing file is missing, unreadable or malformed."""


class StorageWriteError(PageRestoreError):
    """Raised when the backing file cannot be written."""


class NotInViewerMode(PageRestoreError):
    """Raised when the viewer has no document open."""
