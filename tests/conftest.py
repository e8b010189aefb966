"""Pytest configuration and shared fixtures."""
import io
import zipfile
from typing import List, Tuple

import pytest

from skuidsync.models.record import Record
from skuidsync.services.filesystem import FileSystem


class RecordingFileSystem(FileSystem):
    """FileSystem that records calls instead of touching the disk.

    ``fail_on`` maps a path to the exception raised when that path is
    written or ensured.
    """

    def __init__(self, fail_on=None):
        self.files: List[Tuple[str, str]] = []
        self.directories: List[str] = []
        self.ensure_calls: List[str] = []
        self.fail_on = fail_on or {}

    def write_file(self, path, content):
        if path in self.fail_on:
            raise self.fail_on[path]
        self.files.append((path, content.read().decode("utf-8")))

    def ensure_dir(self, path):
        self.ensure_calls.append(path)
        if path in self.fail_on:
            raise self.fail_on[path]
        if path not in self.directories:
            self.directories.append(path)


def build_zip(entries) -> bytes:
    """Build a zip archive in memory from ``(name, body)`` pairs."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, body in entries:
            zf.writestr(name, body)
    return buf.getvalue()


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()


@pytest.fixture
def make_zip():
    """Return a factory producing a seekable zip stream from entries."""
    def _make(entries):
        return io.BytesIO(build_zip(entries))
    return _make


@pytest.fixture
def sample_record() -> Record:
    return Record(
        name="Home",
        unique_id="a1b2c3",
        record_type="desktop",
        module="app1",
        max_auto_saves=10,
        master_page_unique_id="m1",
        is_master_page=False,
        composer_settings='{"zoom":1}',
        body='<skuidpage>\r\n  <models/>\n</skuidpage>',
    )
