"""In-memory menu provider."""
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from app.services.menu.base import Menu, MenuProvider

logger = logging.getLogger(__name__)


def _visible(entries: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Keep only customer-visible entries."""
    return [entry for entry in entries or [] if entry.get("visible", True)]


def menu_from_dict(data: Dict[str, Any]) -> Menu:
    """
    Convert a raw menu mapping into a typed Menu.

    Hidden categories, items, modifier groups and options
    (``visible: false``) are dropped here so matching only ever
    sees what a customer can order.
    """
    categories = []
    for category in _visible(data.get("categories")):
        items = []
        for item in _visible(category.get("items")):
            groups = [
                {
                    **{k: v for k, v in group.items() if k != "visible"},
                    "options": [
                        {k: v for k, v in option.items() if k != "visible"}
                        for option in _visible(group.get("options"))
                    ],
                }
                for group in _visible(item.get("modifiers"))
            ]
            items.append(
                {
                    **{k: v for k, v in item.items() if k != "visible"},
                    "modifiers": groups,
                }
            )
        categories.append({"name": category["name"], "items": items})

    version = data.get("version")
    return Menu.model_validate(
        {
            "categories": categories,
            "version": str(version) if version is not None else None,
        }
    )


class InMemoryMenuProvider(MenuProvider):
    """In-memory menu provider using one YAML file per restaurant."""

    def __init__(self, menus_dir: Optional[str] = None):
        """Initialize with optional menus directory path."""
        if menus_dir is None:
            menus_dir = Path(__file__).parent / "data"
        self.menus_dir = Path(menus_dir)
        self._menus: Dict[str, Menu] = {}

    def _menu_file(self, restaurant_key: str) -> Path:
        # Phone numbers such as "+15551234567" are common keys
        safe_key = restaurant_key.strip().lstrip("+").replace("/", "_")
        return self.menus_dir / f"{safe_key}.yaml"

    async def _load_menu(self, restaurant_key: str) -> Optional[Menu]:
        """Load menu from YAML file."""
        if restaurant_key not in self._menus:
            menu_file = self._menu_file(restaurant_key)
            if not menu_file.exists():
                logger.warning(f"[MENU] No menu file for restaurant '{restaurant_key}' at {menu_file}")
                return None
            with open(menu_file, "r") as f:
                data = yaml.safe_load(f) or {}
            self._menus[restaurant_key] = menu_from_dict(data)
            logger.info(
                f"[MENU] Loaded menu for '{restaurant_key}' - "
                f"{len(self._menus[restaurant_key].items)} items"
            )
        return self._menus[restaurant_key]

    async def get_menu(self, restaurant_key: str) -> Optional[Menu]:
        """Get the resolved menu for a restaurant."""
        return await self._load_menu(restaurant_key)

    async def invalidate(self, restaurant_key: Optional[str] = None) -> None:
        """Drop cached menus so the next request re-reads the YAML."""
        if restaurant_key is None:
            self._menus.clear()
        else:
            self._menus.pop(restaurant_key, None)
