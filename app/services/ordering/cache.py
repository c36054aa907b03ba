"""Per-restaurant menu index cache."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.services.ordering.index import MenuIndex

logger = logging.getLogger(__name__)


class IndexCache(ABC):
    """Abstract store of built menu indices keyed by restaurant."""

    @abstractmethod
    def get(self, restaurant_key: str) -> Optional[MenuIndex]:
        """Get the cached index for a restaurant."""
        pass

    @abstractmethod
    def set(self, restaurant_key: str, index: MenuIndex) -> None:
        """Store an index, replacing any previous one."""
        pass

    @abstractmethod
    def invalidate(self, restaurant_key: Optional[str] = None) -> None:
        """Drop one restaurant's index, or all of them when no key is given."""
        pass


class InMemoryIndexCache(IndexCache):
    """
    Dict-backed cache.

    Two callers may build the same index after an invalidation; the later
    set() wins. Both builds come from the same snapshot, so no lock is taken.
    """

    def __init__(self):
        self._indices: Dict[str, MenuIndex] = {}

    def get(self, restaurant_key: str) -> Optional[MenuIndex]:
        return self._indices.get(restaurant_key)

    def set(self, restaurant_key: str, index: MenuIndex) -> None:
        self._indices[restaurant_key] = index

    def invalidate(self, restaurant_key: Optional[str] = None) -> None:
        if restaurant_key is None:
            logger.info(f"[INDEX] Clearing all cached indices ({len(self._indices)})")
            self._indices.clear()
        else:
            logger.info(f"[INDEX] Clearing cached index for '{restaurant_key}'")
            self._indices.pop(restaurant_key, None)

    def __contains__(self, restaurant_key: str) -> bool:
        return restaurant_key in self._indices
