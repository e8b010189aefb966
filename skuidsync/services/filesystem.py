"""
Filesystem capability used by the archive extractor.

The extractor never touches the disk directly; it calls ``write_file`` and
``ensure_dir`` on a :class:`FileSystem`. :class:`LocalFileSystem` is the
production adapter, rooted at the retrieve target directory.
"""
import os
import shutil
from abc import ABC, abstractmethod
from typing import BinaryIO

from ..utils.persistence.file_utils import ensure_dir


class FileSystem(ABC):
    """Abstract write-side filesystem with two operations."""

    @abstractmethod
    def write_file(self, path: str, content: BinaryIO) -> None:
        """Write the whole of *content* to relative *path*.

        Args:
            path: Relative, ``/``-separated path (e.g. ``pages/app1_Home.json``)
            content: Readable binary stream
        """

    @abstractmethod
    def ensure_dir(self, path: str) -> None:
        """Make sure relative directory *path* exists.

        Args:
            path: Relative, ``/``-separated directory path
        """


class LocalFileSystem(FileSystem):
    """
    Writes under a root directory on the local disk.

    Args:
        root: Directory that relative paths are resolved against
        dir_mode: Permission bits for created directories
        file_mode: Permission bits for written files
    """

    def __init__(self, root: str = ".", dir_mode: int = 0o755, file_mode: int = 0o644):
        self.root = os.path.abspath(root)
        self.dir_mode = dir_mode
        self.file_mode = file_mode

    def resolve(self, path: str) -> str:
        """Resolve relative *path* against the root.

        Raises:
            ValueError: If *path* escapes the root directory.
        """
        full = os.path.normpath(os.path.join(self.root, *path.split("/")))
        if os.path.commonpath([self.root, full]) != self.root:
            raise ValueError(f"Path escapes target directory: {path}")
        return full

    def write_file(self, path, content):
        full = self.resolve(path)
        with open(full, "wb") as f:
            shutil.copyfileobj(content, f)
        os.chmod(full, self.file_mode)

    def ensure_dir(self, path):
        ensure_dir(self.resolve(path), mode=self.dir_mode)
