"""
Category Indexer: distinct category labels of loaded tools and the active filter.
"""

from typing import List, Iterable

from loguru import logger

from compareGraph.core.tool_store import ToolRecord, ToolStore


ALL_CATEGORIES = "all"


def matches_filter(record: ToolRecord, label: str) -> bool:
    """Whether a tool passes the category filter; the catch-all passes everything."""
    return label == ALL_CATEGORIES or label in record.categories


class CategoryIndexer:
    """Tracks the category labels present in the store and the selected filter."""

    def __init__(self):
        self._categories: List[str] = []
        self.active = ALL_CATEGORIES

    @property
    def labels(self) -> List[str]:
        """Catch-all label first, then distinct categories sorted"""
        return [ALL_CATEGORIES] + self._categories

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def refresh(self, store: ToolStore) -> List[str]:
        """Recompute labels from every loaded tool."""
        self._categories = collect_categories(store.values())
        if self.active not in self.labels:
            logger.info(f"Category '{self.active}' no longer present, showing all tools")
            self.active = ALL_CATEGORIES
        return self.labels

    def select(self, label: str) -> str:
        """
        Set the active filter.

        Unknown labels select the catch-all.

        Returns:
            The label that is now active
        """
        if label not in self.labels:
            logger.debug(f"Unknown category '{label}', falling back to '{ALL_CATEGORIES}'")
            label = ALL_CATEGORIES
        if label != self.active:
            logger.info(f"Category filter set to '{label}'")
        self.active = label
        return label

    def reset(self) -> None:
        self._categories = []
        self.active = ALL_CATEGORIES


def collect_categories(records: Iterable[ToolRecord]) -> List[str]:
    categories = set()
    for record in records:
        categories.update(record.categories)
    # A category spelled like the catch-all is folded into it
    if ALL_CATEGORIES in categories:
        logger.warning(f"Category '{ALL_CATEGORIES}' is reserved for the catch-all filter")
        categories.discard(ALL_CATEGORIES)
    return sorted(categories)
