"""
Deploy payload and result models
"""
from typing import List, Optional

from .record import Record


class DeployPayload:
    """
    Changes and deletions pushed to the service in one deploy.

    Unlike manifests on disk, records in a payload carry their body.
    """

    def __init__(self, changes: Optional[List[Record]] = None,
                 deletions: Optional[List[Record]] = None):
        self.changes = list(changes or [])
        self.deletions = list(deletions or [])

    def is_empty(self) -> bool:
        return not self.changes and not self.deletions

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "changes": [r.to_dict(include_body=True) for r in self.changes],
            "deletions": [r.to_dict(include_body=True) for r in self.deletions],
        }

    @classmethod
    def from_records(cls, records):
        """Build a payload that upserts every record in *records*."""
        return cls(changes=records)


class DeployResult:
    """Outcome of a deploy reported by the service for one org.

    Parsed by `skuidsync report` from a saved deploy response.
    """

    def __init__(self, org_name="", success=False, errors=None):
        self.org_name = org_name
        self.success = success
        self.errors = list(errors or [])

    def to_dict(self):
        data = {
            "orgName": self.org_name,
            "success": self.success,
        }
        if self.errors:
            data["upsertErrors"] = list(self.errors)
        return data

    @classmethod
    def from_dict(cls, data):
        """Deserialize from dictionary"""
        data = data or {}
        return cls(
            org_name=data.get("orgName", ""),
            success=bool(data.get("success", False)),
            errors=data.get("upsertErrors") or [],
        )
