"""
Retrieval services.

- :mod:`filesystem` — write-side filesystem capability and local adapter
- :mod:`extractor`  — archive extraction into the category layout
"""
from .filesystem import FileSystem, LocalFileSystem
from .extractor import ArchiveExtractor, ExtractionResult, extract, open_archive

__all__ = [
    'FileSystem',
    'LocalFileSystem',
    'ArchiveExtractor',
    'ExtractionResult',
    'extract',
    'open_archive',
]
