"""Menu change webhook endpoints."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.dependencies import get_menu_repository, get_order_parser
from app.services.menu.repository import MenuRepository
from app.services.ordering.parser import OrderParser

router = APIRouter()
logger = logging.getLogger(__name__)


class MenuUpdatedEvent(BaseModel):
    """Menu change notification; no key means every restaurant changed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    restaurant_key: Optional[str] = None


@router.post("/menu-updated")
async def handle_menu_updated(
    request: Request,
    event: MenuUpdatedEvent,
    menu_repository: MenuRepository = Depends(get_menu_repository),
    order_parser: OrderParser = Depends(get_order_parser),
):
    """
    Handle a menu change from the point-of-sale side.

    Drops the cached menu and its search index; the next parse for
    the restaurant reloads and rebuilds both.
    """
    target = event.restaurant_key or "all"
    logger.info(
        f"[MENU WEBHOOK] Menu updated - restaurant: {target}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    await menu_repository.invalidate(event.restaurant_key)
    order_parser.invalidate_index(event.restaurant_key)
    return {"status": "ok", "invalidated": target}
