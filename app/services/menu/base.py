"""Menu models and provider interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)


def to_money(value: Any) -> Any:
    """Convert floats through str so 14.99 stays Decimal("14.99")."""
    if isinstance(value, float):
        return Decimal(str(value))
    if value is None:
        return Decimal("0")
    return value


# Prices stay Decimal in Python and go out as plain JSON numbers.
Money = Annotated[
    Decimal,
    BeforeValidator(to_money),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ModifierOption(BaseModel):
    """A single choice inside a modifier group."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Money = Decimal("0")
    is_default: bool = False  # Informational only


class ModifierGroup(BaseModel):
    """A named set of related choices for a menu item."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    min_selections: int = Field(default=0, ge=0)
    max_selections: int = 1
    multi_select: bool = False
    options: List[ModifierOption] = []

    @model_validator(mode="after")
    def check_selection_bounds(self) -> "ModifierGroup":
        if self.max_selections < self.min_selections:
            raise ValueError(
                f"max_selections ({self.max_selections}) is below "
                f"min_selections ({self.min_selections}) for group '{self.name}'"
            )
        return self

    @property
    def effective_max_selections(self) -> int:
        """Single-select groups never take more than one option."""
        return self.max_selections if self.multi_select else 1


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Money = Decimal("0")
    description: str = ""
    category: str = ""
    modifiers: List[ModifierGroup] = []

    @field_validator("description", mode="before")
    @classmethod
    def empty_description(cls, value: Any) -> Any:
        return value or ""


class MenuCategory(BaseModel):
    """Menu category holding items in declaration order."""

    model_config = ConfigDict(frozen=True)

    name: str
    items: List[MenuItem] = []


class Menu(BaseModel):
    """Resolved menu snapshot for one restaurant."""

    model_config = ConfigDict(frozen=True)

    categories: List[MenuCategory] = []
    version: Optional[str] = None

    @property
    def items(self) -> List[MenuItem]:
        """All items in declaration order, stamped with their category name."""
        return [
            item.model_copy(update={"category": category.name})
            for category in self.categories
            for item in category.items
        ]

    @property
    def category_names(self) -> List[str]:
        return [category.name for category in self.categories]


class MenuProvider(ABC):
    """Abstract base class for menu providers."""

    @abstractmethod
    async def get_menu(self, restaurant_key: str) -> Optional[Menu]:
        """Get the resolved menu for a restaurant, or None if unknown."""
        pass

    @abstractmethod
    async def invalidate(self, restaurant_key: Optional[str] = None) -> None:
        """Drop cached menus for one restaurant or all of them."""
        pass
