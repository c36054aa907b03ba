"""Menu repository."""
from typing import Optional
from app.services.menu.base import Menu, MenuItem, MenuProvider


class MenuRepository:
    """Repository for menu operations."""

    def __init__(self, provider: MenuProvider):
        self.provider = provider

    async def get_menu(self, restaurant_key: str) -> Optional[Menu]:
        """Get the full menu for a restaurant."""
        return await self.provider.get_menu(restaurant_key)

    async def invalidate(self, restaurant_key: Optional[str] = None) -> None:
        """Forget cached menus."""
        await self.provider.invalidate(restaurant_key)

    async def get_item_by_name(self, restaurant_key: str, item_name: str) -> Optional[MenuItem]:
        """Get item by exact (case-insensitive) name."""
        menu = await self.get_menu(restaurant_key)
        if menu is None:
            return None
        item_name_lower = item_name.lower().strip()
        for item in menu.items:
            if item.name.lower() == item_name_lower:
                return item
        return None
