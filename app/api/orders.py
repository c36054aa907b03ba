"""Order parsing API endpoints."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.config import settings
from app.core.dependencies import get_menu_repository, get_order_parser
from app.services.menu.repository import MenuRepository
from app.services.ordering.models import ParseResult
from app.services.ordering.parser import OrderParser


router = APIRouter()
logger = logging.getLogger(__name__)


class ParseOrderRequest(BaseModel):
    """Parse request model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    utterance: str
    restaurant_key: Optional[str] = None


@router.post("/api/orders/parse", response_model=ParseResult)
async def parse_order(
    request: Request,
    body: ParseOrderRequest,
    menu_repository: MenuRepository = Depends(get_menu_repository),
    order_parser: OrderParser = Depends(get_order_parser),
):
    """Parse a transcribed utterance into a priced order line."""
    restaurant_key = body.restaurant_key or settings.default_restaurant_key
    logger.info(
        f"[PARSE ORDER] Request received - restaurant: {restaurant_key}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        menu = await menu_repository.get_menu(restaurant_key)
        result = order_parser.parse_order(menu, body.utterance, restaurant_key=restaurant_key)
        logger.info(
            f"[PARSE ORDER] Completed - restaurant: {restaurant_key}, success: {result.success}, "
            f"item: {result.match.item.name if result.match else None}"
        )
        return result

    except Exception as e:
        logger.error(
            f"[PARSE ORDER] Error parsing order - restaurant: {restaurant_key}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error parsing order: {str(e)}")
