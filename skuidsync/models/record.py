"""
Record model for a single piece of Skuid metadata
"""
import copy
from typing import Any, Dict, Optional

from ..errors import ManifestParseError

MANIFEST_EXTENSION = ".json"
BODY_EXTENSION = ".xml"


class Record:
    """
    Represents one metadata record (page, data source, app, profile, theme).

    The manifest fields are persisted as JSON; ``body`` (markup or code) is
    always persisted in a separate file.
    """

    def __init__(self, name="", unique_id="", record_type="", module="",
                 max_auto_saves=0, master_page_unique_id="", is_master_page=False,
                 composer_settings=None, body=""):
        """
        Initialize a Record.

        Args:
            name: Record name
            unique_id: Remote unique identifier
            record_type: Category discriminator reported by the service
            module: Optional module (namespace) the record belongs to
            max_auto_saves: Number of autosaves the service keeps
            master_page_unique_id: Unique id of the master page, if any
            is_master_page: True if this record is a master page
            composer_settings: Opaque composer settings (may be None)
            body: Raw body payload
        """
        self.name = name
        self.unique_id = unique_id
        self.type = record_type
        self.module = module
        self.max_auto_saves = max_auto_saves
        self.master_page_unique_id = master_page_unique_id
        self.is_master_page = is_master_page
        self.composer_settings = composer_settings
        self.body = body

    def file_basename(self) -> str:
        """Get the on-disk basename shared by the manifest and body files.

        Example:
            >>> Record(name="Home", module="app1").file_basename()
            'app1_Home'
            >>> Record(name="Home").file_basename()
            'Home'
        """
        if self.module:
            return f"{self.module}_{self.name}"
        return self.name

    def manifest_filename(self) -> str:
        return self.file_basename() + MANIFEST_EXTENSION

    def body_filename(self) -> str:
        return self.file_basename() + BODY_EXTENSION

    def without_body(self) -> "Record":
        """Return a copy of this record with ``body`` cleared."""
        clone = copy.copy(self)
        clone.body = ""
        return clone

    def to_dict(self, include_body: bool = False) -> Dict[str, Any]:
        """Serialize to dictionary using the service's field names.

        ``masterPageUniqueId`` is omitted when empty; ``composerSettings``
        is always present. ``body`` is only included when requested and
        non-empty.
        """
        data = {
            "name": self.name,
            "uniqueId": self.unique_id,
            "type": self.type,
            "module": self.module,
            "maxAutoSaves": self.max_auto_saves,
        }
        if self.master_page_unique_id:
            data["masterPageUniqueId"] = self.master_page_unique_id
        data["isMasterPage"] = self.is_master_page
        data["composerSettings"] = self.composer_settings
        if include_body and self.body:
            data["body"] = self.body
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Record":
        """Deserialize from dictionary.

        Raises:
            ManifestParseError: If *data* is not an object or a field has
                the wrong type.
        """
        if not isinstance(data, dict):
            raise ManifestParseError(
                f"Manifest must be a JSON object, got {type(data).__name__}"
            )

        string_fields = ("name", "uniqueId", "type", "module", "masterPageUniqueId", "body")
        for key in string_fields:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ManifestParseError(f"Field '{key}' must be a string")

        max_auto_saves = data.get("maxAutoSaves") or 0
        if isinstance(max_auto_saves, bool) or not isinstance(max_auto_saves, int):
            raise ManifestParseError("Field 'maxAutoSaves' must be an integer")

        is_master_page = data.get("isMasterPage") or False
        if not isinstance(is_master_page, bool):
            raise ManifestParseError("Field 'isMasterPage' must be a boolean")

        return cls(
            name=data.get("name") or "",
            unique_id=data.get("uniqueId") or "",
            record_type=data.get("type") or "",
            module=data.get("module") or "",
            max_auto_saves=max_auto_saves,
            master_page_unique_id=data.get("masterPageUniqueId") or "",
            is_master_page=is_master_page,
            composer_settings=data.get("composerSettings"),
            body=data.get("body") or "",
        )

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return self.to_dict(include_body=True) == other.to_dict(include_body=True)

    def __repr__(self):
        return f"Record(name={self.name!r}, module={self.module!r}, type={self.type!r})"
