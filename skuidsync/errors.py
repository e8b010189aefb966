"""
Exception hierarchy for metadata retrieval and local persistence.

``NotFoundError``, ``ArchiveReadError`` and ``StorageError`` abort the
operation that raised them. ``ManifestParseError`` is absorbed per record
by the reader.
"""


class SkuidSyncError(Exception):
    """Base class for all skuidsync errors."""


class NotFoundError(SkuidSyncError, FileNotFoundError):
    """Target directory does not exist."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Directory not found: {self.path}")


class ArchiveReadError(SkuidSyncError):
    """An archive stream or one of its entries could not be read."""

    def __init__(self, message, entry=None):
        self.entry = entry
        super().__init__(message)


class StorageError(SkuidSyncError, OSError):
    """Writing a file or creating a directory failed."""

    def __init__(self, message, path=None):
        self.path = None if path is None else str(path)
        super().__init__(message)


class ManifestParseError(SkuidSyncError, ValueError):
    """A manifest file's content is not a valid record."""
