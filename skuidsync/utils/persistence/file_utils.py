"""
File system utilities
"""
import json
import logging
import os

log = logging.getLogger(__name__)


def ensure_dir(directory, mode=0o755):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path
        mode: Permission bits for newly created directories
    """
    os.makedirs(directory, mode=mode, exist_ok=True)


def save_json(filepath, data, compact=True):
    """
    Save data to JSON file.

    Args:
        filepath: Path to JSON file
        data: Data to serialize
        compact: If True, use single-line format (default)

    Returns:
        True if successful
    """
    try:
        parent = os.path.dirname(filepath)
        if parent:
            ensure_dir(parent)

        with open(filepath, 'w', encoding='utf-8') as f:
            if compact:
                json.dump(data, f, separators=(',', ':'))
            else:
                json.dump(data, f, indent=2)
        return True
    except (OSError, TypeError, ValueError) as e:
        log.error("Error saving JSON to %s: %s", filepath, e)
        return False


def load_json(filepath, default=None):
    """
    Load data from JSON file.

    Args:
        filepath: Path to JSON file
        default: Default value if file doesn't exist

    Returns:
        Loaded data or default value
    """
    if not os.path.exists(filepath):
        return default

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        log.error("Error loading JSON from %s: %s", filepath, e)
        return default


def read_text(filepath):
    """Read a UTF-8 text file verbatim (line endings untouched).

    Bytes that are not valid UTF-8 are kept as surrogate escapes, so
    :func:`write_text` writes them back unchanged.

    Returns:
        File content, or None if the file does not exist or cannot be read.
        A missing file is logged at debug level, other failures as warnings.
    """
    try:
        with open(filepath, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
            return f.read()
    except FileNotFoundError:
        log.debug("No file at %s", filepath)
        return None
    except OSError as e:
        log.warning("Could not read %s: %s", filepath, e)
        return None


def write_text(filepath, content):
    """Write *content* to a UTF-8 text file verbatim.

    Surrogate escapes produced by :func:`read_text` are written back as the
    original bytes. Content is encoded before the file is opened, so an
    encoding failure leaves no file behind.

    Raises:
        OSError: If the file cannot be written
        UnicodeEncodeError: If *content* holds an unpaired surrogate that
            does not come from :func:`read_text`
    """
    data = content.encode('utf-8', errors='surrogateescape')
    with open(filepath, 'wb') as f:
        f.write(data)
