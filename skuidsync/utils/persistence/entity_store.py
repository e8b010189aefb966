"""Local record storage.

Each record lives in a category directory as two sibling files sharing a
basename (``<module>_<name>``): a JSON manifest holding every field except
the body, and an XML file holding the body verbatim::

    pages/app1_Home.json
    pages/app1_Home.xml

:func:`write_at_rest` writes one pair; :func:`read_files` finds manifests by
module prefix (or an explicit glob) and rebuilds the records. Matches are
returned in lexical order so reads are reproducible.
"""
import glob
import json
import os
from typing import Iterable, List

from ...errors import ManifestParseError, NotFoundError, StorageError
from ...models.record import BODY_EXTENSION, MANIFEST_EXTENSION, Record
from ..logger import get_logger
from .file_utils import read_text, write_text

log = get_logger(__name__)


def write_at_rest(record: Record, base_path: str) -> None:
    """Persist *record* as a manifest + body pair under *base_path*.

    A missing *base_path* is created on a best-effort basis; if that fails
    the manifest write reports the problem.

    Args:
        record: Record to persist
        base_path: Category directory (e.g. ``pages``)

    Raises:
        StorageError: If the manifest or the body cannot be written or
            encoded. The body is not attempted when the manifest fails.
    """
    if not os.path.exists(base_path):
        try:
            os.mkdir(base_path, 0o700)
        except OSError as e:
            log.debug("Could not create %s: %s", base_path, e)

    manifest = json.dumps(record.without_body().to_dict(), indent=4)
    manifest_path = os.path.join(base_path, record.manifest_filename())
    body_path = os.path.join(base_path, record.body_filename())

    for path, content in ((manifest_path, manifest), (body_path, record.body)):
        try:
            write_text(path, content)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not write {path}: {e}", path=path) from e
        log.debug("Wrote %s", path)


def filter_by_glob(pattern: str) -> List[str]:
    """Resolve *pattern* as a glob, sorted lexically."""
    return sorted(glob.glob(pattern))


def filter_by_module(directory: str, module_filter: str) -> List[str]:
    """Find files in *directory* whose names start with ``<module_filter>_``."""
    pattern = os.path.join(glob.escape(directory), f"{module_filter}_*")
    return filter_by_glob(pattern)


def filter_out_body_files(files: Iterable[str]) -> List[str]:
    return [path for path in files if os.path.splitext(path)[1] != BODY_EXTENSION]


def body_path_for(manifest_path: str) -> str:
    """Get the body file paired with *manifest_path*.

    Example:
        >>> body_path_for("pages/app1_Home.json")
        'pages/app1_Home.xml'
    """
    return os.path.splitext(manifest_path)[0] + BODY_EXTENSION


def parse_manifest(text) -> Record:
    """Parse manifest *text* into a body-less record.

    Raises:
        ManifestParseError: If *text* is missing, not JSON, or not a record.
    """
    if text is None:
        raise ManifestParseError("Manifest could not be read")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON: {e}") from e
    return Record.from_dict(data)


def read_record(manifest_path: str) -> Record:
    """Rebuild one record from its manifest and paired body file.

    A malformed manifest yields an empty record (logged as a warning); a
    missing body yields an empty body. Body bytes that are not valid UTF-8
    are kept as surrogate escapes rather than dropped.
    """
    try:
        record = parse_manifest(read_text(manifest_path))
    except ManifestParseError as e:
        log.warning("Malformed manifest %s: %s", manifest_path, e)
        record = Record()

    body = read_text(body_path_for(manifest_path))
    record.body = body or ""
    return record


def read_files(directory: str, module_filter: str, explicit_pattern: str = "") -> List[Record]:
    """Read local records.

    Args:
        directory: Category directory to scan
        module_filter: Module name; files must start with ``<module>_``
        explicit_pattern: Glob to use instead of *directory*/*module_filter*

    Returns:
        Records in lexical order of their manifest paths

    Raises:
        NotFoundError: If *directory* does not exist and no explicit
            pattern was given.
    """
    if explicit_pattern:
        files = filter_by_glob(explicit_pattern)
    else:
        if not os.path.isdir(directory):
            raise NotFoundError(directory)
        files = filter_by_module(directory, module_filter)

    return [read_record(path) for path in filter_out_body_files(files)]


def read_modules(directory: str, modules: Iterable[str], explicit_pattern: str = "") -> List[Record]:
    """Read records for several modules, in the order given.

    With an explicit pattern the module list is ignored. With no modules,
    every manifest in *directory* is read.
    """
    if explicit_pattern:
        return read_files(directory, "", explicit_pattern)

    modules = list(modules)
    if not modules:
        if not os.path.isdir(directory):
            raise NotFoundError(directory)
        pattern = os.path.join(glob.escape(directory), f"*{MANIFEST_EXTENSION}")
        return read_files(directory, "", pattern)

    records = []
    for module in modules:
        records.extend(read_files(directory, module))
    return records


def parse_module_list(value) -> List[str]:
    """Split a comma-separated module list.

    Example:
        >>> parse_module_list("app1, app2,")
        ['app1', 'app2']
    """
    if not value:
        return []
    return [m.strip() for m in value.split(",") if m.strip()]
