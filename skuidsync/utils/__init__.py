"""Utility modules for skuidsync.

Sub-packages:
- persistence/ — file I/O helpers and the local manifest/body record store
"""

from .config_loader import ConfigLoader, handle_config_update
from .persistence.file_utils import ensure_dir, save_json, load_json
from .logger import get_logger, setup_logging

__all__ = [
    'ConfigLoader',
    'handle_config_update',
    'ensure_dir',
    'save_json',
    'load_json',
    'get_logger',
    'setup_logging',
]
