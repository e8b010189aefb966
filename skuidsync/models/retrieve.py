"""
Retrieve selection models
"""
from typing import Dict, Optional

from .category import Category


class RetrieveMetadata:
    """
    Selection of metadata to retrieve, one mapping per category.

    Each mapping goes from a human-readable name to the remote identifier.
    """

    def __init__(self, apps=None, data_sources=None, pages=None,
                 profiles=None, themes=None):
        self.apps = dict(apps or {})
        self.data_sources = dict(data_sources or {})
        self.pages = dict(pages or {})
        self.profiles = dict(profiles or {})
        self.themes = dict(themes or {})

    def for_category(self, category: Category) -> Dict[str, str]:
        """Get the selection mapping for *category*."""
        return {
            Category.APPS: self.apps,
            Category.DATA_SOURCES: self.data_sources,
            Category.PAGES: self.pages,
            Category.PROFILES: self.profiles,
            Category.THEMES: self.themes,
        }[Category(category)]

    def is_empty(self) -> bool:
        return not any(self.for_category(c) for c in Category)

    def to_dict(self):
        """Serialize to dictionary; empty mappings are omitted."""
        data = {}
        for category in Category:
            mapping = self.for_category(category)
            if mapping:
                data[category.selection_key] = dict(mapping)
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """Deserialize from dictionary"""
        data = data or {}
        return cls(
            apps=data.get("apps"),
            data_sources=data.get("dataSources"),
            pages=data.get("pages"),
            profiles=data.get("profiles"),
            themes=data.get("themes"),
        )

    @classmethod
    def from_records(cls, category, records):
        """Select *records* under *category*, keyed by name.

        Records without a name or unique id cannot be requested and are
        left out.
        """
        mapping = {r.name: r.unique_id for r in records if r.name and r.unique_id}
        selection = cls()
        selection.for_category(category).update(mapping)
        return selection


class RetrieveRequest:
    """Request body sent to the retrieve endpoint.

    `skuidsync package --request` builds one from local records.
    """

    def __init__(self, metadata: Optional[RetrieveMetadata] = None):
        self.metadata = metadata or RetrieveMetadata()

    def to_dict(self):
        return {"metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(RetrieveMetadata.from_dict((data or {}).get("metadata")))
