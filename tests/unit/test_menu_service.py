"""Unit tests for menu service and repository."""
import pytest
from decimal import Decimal
from pydantic import ValidationError

from app.services.menu.base import ModifierGroup
from app.services.menu.in_memory_menu import menu_from_dict


class TestMenuService:
    """Test menu repository and provider."""

    async def test_load_menu_from_yaml(self, test_menu_repository):
        """Test loading menu from YAML file."""
        menu = await test_menu_repository.get_menu("test")

        assert menu.category_names == ["Pizza", "Entrees", "Sandwiches"]
        assert menu.version == "7"
        assert menu.items[0].name == "Margherita Pizza"
        assert menu.items[0].category == "Pizza"

    async def test_prices_are_decimal(self, test_menu_repository):
        """Test YAML floats become exact decimals."""
        item = await test_menu_repository.get_item_by_name("test", "margherita pizza")

        assert item.price == Decimal("12.99")
        assert isinstance(item.price, Decimal)

    async def test_hidden_entries_dropped(self, test_menu_repository):
        """Test invisible items and options are filtered out."""
        menu = await test_menu_repository.get_menu("test")
        names = [item.name for item in menu.items]

        assert "Lobster Roll" not in names
        chicken = await test_menu_repository.get_item_by_name("test", "Chicken Parmesan")
        options = [option.name for option in chicken.modifiers[0].options]
        assert options == ["Extra Cheese", "Extra Sauce"]

    async def test_unknown_restaurant(self, test_menu_repository):
        assert await test_menu_repository.get_menu("nope") is None
        assert await test_menu_repository.get_item_by_name("nope", "burger") is None

    async def test_get_item_by_name_case_insensitive(self, test_menu_repository):
        item1 = await test_menu_repository.get_item_by_name("test", "BURGER")
        item2 = await test_menu_repository.get_item_by_name("test", "burger")

        assert item1 is not None
        assert item1 == item2

    async def test_menu_memoized_until_invalidated(self, test_menu_repository):
        """Test the provider reuses a loaded menu until told it changed."""
        first = await test_menu_repository.get_menu("test")
        assert await test_menu_repository.get_menu("test") is first

        await test_menu_repository.invalidate("test")
        assert await test_menu_repository.get_menu("test") is not first

        await test_menu_repository.invalidate()
        assert test_menu_repository.provider._menus == {}

    async def test_phone_number_key(self, test_menus_dir, tmp_path):
        """Test a leading plus is dropped when locating the menu file."""
        from app.services.menu.in_memory_menu import InMemoryMenuProvider

        (tmp_path / "15551234567.yaml").write_text(
            (test_menus_dir / "test.yaml").read_text()
        )
        provider = InMemoryMenuProvider(menus_dir=str(tmp_path))
        menu = await provider.get_menu("+15551234567")

        assert menu is not None
        assert len(menu.items) == 5


class TestMenuModels:
    """Test menu model validation."""

    def test_single_select_effective_max(self):
        group = ModifierGroup(name="Bread", max_selections=3, multi_select=False)
        assert group.effective_max_selections == 1

        group = ModifierGroup(name="Toppings", max_selections=3, multi_select=True)
        assert group.effective_max_selections == 3

    def test_max_below_min_rejected(self):
        with pytest.raises(ValidationError):
            ModifierGroup(name="Bad", min_selections=2, max_selections=1)

    def test_negative_min_rejected(self):
        with pytest.raises(ValidationError):
            ModifierGroup(name="Bad", min_selections=-1)

    def test_menu_from_dict_defaults(self):
        menu = menu_from_dict(
            {"categories": [{"name": "Drinks", "items": [{"name": "Water", "description": None}]}]}
        )
        item = menu.items[0]

        assert item.price == Decimal("0")
        assert item.description == ""
        assert item.modifiers == []
        assert menu.version is None
