"""
Archive extraction into the category directory layout.

Each retrieve response is a zip archive whose entries are laid out as
``<category>/<file>``. Entries under a recognized category are written
through a :class:`~skuidsync.services.filesystem.FileSystem`; everything
else is ignored.
"""
import io
import os
import posixpath
import queue
import threading
import zipfile
import zlib
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, List, Optional, Union

from ..errors import ArchiveReadError, SkuidSyncError, StorageError
from ..models.category import Category
from ..utils.logger import get_logger
from .filesystem import FileSystem

log = get_logger(__name__)

ArchiveSource = Union[str, os.PathLike, bytes, BinaryIO]

# Errors zipfile raises for corrupt, truncated, encrypted or unsupported entries
_ARCHIVE_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


@dataclass
class ExtractionResult:
    """Files written and directories created by one extraction."""

    files: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.files and not self.directories


def open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """Open a zip archive from a path, raw bytes or a binary stream.

    Non-seekable streams (e.g. an HTTP response body) are buffered in
    memory first. A zero-length payload is treated as an empty archive,
    whichever form it arrives in.

    Raises:
        ArchiveReadError: If the payload is not a readable zip archive.
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        elif not isinstance(source, (str, os.PathLike)):
            seekable = getattr(source, "seekable", None)
            if seekable is None or not seekable():
                source = io.BytesIO(source.read())

        if _payload_size(source) == 0:
            source = _empty_archive()

        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as e:
        raise ArchiveReadError(f"Invalid archive: {e}") from e
    except OSError as e:
        raise ArchiveReadError(f"Could not read archive: {e}") from e


def _payload_size(source) -> int:
    """Bytes left to read in a path or seekable stream."""
    if isinstance(source, (str, os.PathLike)):
        return os.path.getsize(source)
    position = source.tell()
    end = source.seek(0, io.SEEK_END)
    source.seek(position)
    return end - position


def _empty_archive():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w"):
        pass
    buf.seek(0)
    return buf


def _is_safe_entry(name: str) -> bool:
    parts = name.split("/")
    return "" not in parts[:-1] and ".." not in parts and "\\" not in name


class _ExtractionRun:
    """
    State for a single extraction call.

    Holds the set of directories already ensured so repeated entries in the
    same directory cause one ``ensure_dir`` call, across every stream of
    the run. A lock and stop event are only supplied for concurrent runs.
    """

    def __init__(self, filesystem: FileSystem, lock=None, stop_event=None):
        self.filesystem = filesystem
        self.result = ExtractionResult()
        self._ensured = set()
        self._lock = lock if lock is not None else nullcontext()
        self._stop_event = stop_event

    @property
    def stopped(self) -> bool:
        return self._stop_event is not None and self._stop_event.is_set()

    def stop(self):
        if self._stop_event is not None:
            self._stop_event.set()

    def extract_stream(self, source: ArchiveSource, index: int = 0):
        with open_archive(source) as archive:
            for info in archive.infolist():
                if self.stopped:
                    log.debug("Stopping archive #%d early", index)
                    return
                self._extract_entry(archive, info)

    def _extract_entry(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo):
        name = info.filename
        if info.is_dir() or Category.from_path(name) is None:
            log.debug("Skipping %s", name)
            return
        if not _is_safe_entry(name):
            log.warning("Skipping unsafe archive entry %s", name)
            return

        self._ensure_dir(posixpath.dirname(name))

        try:
            content = archive.read(info)
        except _ARCHIVE_ERRORS as e:
            raise ArchiveReadError(f"Could not read {name}: {e}", entry=name) from e

        try:
            self.filesystem.write_file(name, io.BytesIO(content))
        except SkuidSyncError:
            raise
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not write {name}: {e}", path=name) from e

        with self._lock:
            self.result.files.append(name)
        log.debug("Wrote %s", name)

    def _ensure_dir(self, directory: str):
        # Held across the call so no writer sees a half-created directory
        with self._lock:
            if directory in self._ensured:
                return
            try:
                self.filesystem.ensure_dir(directory)
            except SkuidSyncError:
                raise
            except (OSError, ValueError) as e:
                raise StorageError(
                    f"Could not create directory {directory}: {e}", path=directory
                ) from e
            self._ensured.add(directory)
            self.result.directories.append(directory)
            log.debug("Created directory %s", directory)


class ArchiveExtractor:
    """
    Writes recognized entries of retrieved archives through a filesystem.

    Args:
        filesystem: Write-side capability (usually a ``LocalFileSystem``)
    """

    def __init__(self, filesystem: FileSystem):
        self.filesystem = filesystem

    def extract(self, archive_streams: Iterable[ArchiveSource]) -> ExtractionResult:
        """Extract archives in order, stopping at the first failure.

        Files written before a failure stay on disk.

        Args:
            archive_streams: Archive paths, bytes or binary streams

        Returns:
            ExtractionResult listing written files and created directories

        Raises:
            ArchiveReadError: An archive or entry could not be read
            StorageError: A directory or file could not be written
        """
        run = _ExtractionRun(self.filesystem)
        for index, stream in enumerate(archive_streams):
            run.extract_stream(stream, index)
        return run.result

    def extract_concurrently(self, archive_streams: Iterable[ArchiveSource],
                             max_workers: int = 4) -> ExtractionResult:
        """Extract archives on worker threads, one archive per task.

        Directory creation is still deduplicated across all archives. The
        first failure stops the remaining workers before their next entry
        and is re-raised here. The order of ``files`` follows completion,
        not archive order.

        Args:
            archive_streams: Archive paths, bytes or binary streams
            max_workers: Upper bound on worker threads
        """
        work_queue = queue.Queue()
        for index, stream in enumerate(archive_streams):
            work_queue.put((index, stream))

        run = _ExtractionRun(self.filesystem, threading.Lock(), threading.Event())
        if work_queue.empty():
            return run.result

        errors = queue.Queue()

        def worker():
            while not run.stopped:
                try:
                    index, stream = work_queue.get_nowait()
                except queue.Empty:
                    return
                try:
                    run.extract_stream(stream, index)
                except Exception as e:  # re-raised by the caller thread
                    errors.put(e)
                    run.stop()

        threads = []
        num_workers = max(1, min(max_workers, work_queue.qsize()))
        for _ in range(num_workers):
            t = threading.Thread(target=worker, daemon=True)
            t.start()
            threads.append(t)

        for t in threads:
            t.join()

        if not errors.empty():
            raise errors.get()
        return run.result


def extract(archive_streams: Iterable[ArchiveSource], filesystem: FileSystem,
            max_workers: Optional[int] = None) -> ExtractionResult:
    """Extract *archive_streams* through *filesystem*.

    Runs sequentially unless *max_workers* is greater than one.
    """
    extractor = ArchiveExtractor(filesystem)
    if max_workers and max_workers > 1:
        return extractor.extract_concurrently(archive_streams, max_workers)
    return extractor.extract(archive_streams)
