"""
Metadata categories recognized in retrieved archives
"""
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Top-level directory names that partition retrieved metadata.

    Inherits from ``str`` so that ``Category.PAGES == "pages"`` is ``True``
    and archive paths can be compared against members directly.
    """
    DATA_SOURCES = "datasources"
    PAGES = "pages"
    APPS = "apps"
    PROFILES = "profiles"
    THEMES = "themes"

    @property
    def selection_key(self) -> str:
        """Key of this category in a retrieve selection (``RetrieveMetadata``)."""
        return _SELECTION_KEYS[self]

    @classmethod
    def from_path(cls, path: str) -> Optional["Category"]:
        """Classify an archive entry path by its first segment.

        Returns:
            The matching category, or None when the first segment is not
            a category directory.

        Example:
            >>> Category.from_path("pages/app1_Home.json")
            <Category.PAGES: 'pages'>
            >>> Category.from_path("readme.txt") is None
            True
        """
        head, sep, _ = path.partition("/")
        if not sep:
            return None
        try:
            return cls(head)
        except ValueError:
            return None


_SELECTION_KEYS = {
    Category.DATA_SOURCES: "dataSources",
    Category.PAGES: "pages",
    Category.APPS: "apps",
    Category.PROFILES: "profiles",
    Category.THEMES: "themes",
}

CATEGORY_NAMES = frozenset(c.value for c in Category)
