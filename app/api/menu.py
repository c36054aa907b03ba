"""Menu API endpoints."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.dependencies import get_menu_repository
from app.services.menu.base import Menu, MenuItem
from app.services.menu.repository import MenuRepository


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/menu/{restaurant_key}", response_model=Menu)
async def get_menu(
    restaurant_key: str,
    request: Request,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Get the full menu for a restaurant."""
    logger.info(
        f"[MENU] Request received - restaurant: {restaurant_key}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        menu = await menu_repository.get_menu(restaurant_key)
    except Exception as e:
        logger.error(
            f"[MENU] Error fetching menu - restaurant: {restaurant_key}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching menu: {str(e)}")

    if menu is None:
        raise HTTPException(status_code=404, detail=f"No menu for restaurant '{restaurant_key}'")
    logger.info(f"[MENU] Menu loaded - {len(menu.items)} items, {len(menu.categories)} categories")
    return menu


@router.get("/api/menu/{restaurant_key}/items/{item_name}", response_model=MenuItem)
async def get_menu_item(
    restaurant_key: str,
    item_name: str,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Get one menu item by name."""
    item = await menu_repository.get_item_by_name(restaurant_key, item_name)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item '{item_name}' not found")
    return item
