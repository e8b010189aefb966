"""Persistence utilities sub-package.

Contains generic file I/O helpers and the manifest/body record store.
"""
from .file_utils import (
    ensure_dir,
    save_json,
    load_json,
    read_text,
    write_text,
)
from .entity_store import (
    write_at_rest,
    read_files,
    read_modules,
    read_record,
    parse_manifest,
    parse_module_list,
    filter_by_glob,
    filter_by_module,
    filter_out_body_files,
    body_path_for,
)

__all__ = [
    # file_utils
    'ensure_dir',
    'save_json',
    'load_json',
    'read_text',
    'write_text',
    # entity_store
    'write_at_rest',
    'read_files',
    'read_modules',
    'read_record',
    'parse_manifest',
    'parse_module_list',
    'filter_by_glob',
    'filter_by_module',
    'filter_out_body_files',
    'body_path_for',
]
