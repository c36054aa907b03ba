"""FastAPI dependencies."""
from functools import lru_cache
from fastapi import Depends

from app.core.config import settings
from app.services.menu.repository import MenuRepository
from app.services.menu.in_memory_menu import InMemoryMenuProvider
from app.services.ordering.cache import IndexCache, InMemoryIndexCache
from app.services.ordering.parser import OrderParser


@lru_cache
def get_menu_repository() -> MenuRepository:
    """Get menu repository instance."""
    return MenuRepository(provider=InMemoryMenuProvider(menus_dir=str(settings.menus_dir)))


@lru_cache
def get_index_cache() -> IndexCache:
    """Get the process-wide menu index cache."""
    return InMemoryIndexCache()


def get_order_parser(cache: IndexCache = Depends(get_index_cache)) -> OrderParser:
    """Get order parser bound to the shared index cache."""
    return OrderParser(cache=cache, config=settings.matcher)
