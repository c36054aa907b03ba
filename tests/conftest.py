"""Shared test fixtures and configuration."""
import pytest
import yaml
from decimal import Decimal
from pathlib import Path
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import MatcherConfig
from app.core.dependencies import get_index_cache, get_menu_repository
from app.services.menu.base import Menu, MenuCategory, MenuItem, ModifierGroup, ModifierOption
from app.services.menu.repository import MenuRepository
from app.services.menu.in_memory_menu import InMemoryMenuProvider, menu_from_dict
from app.services.ordering.cache import InMemoryIndexCache
from app.services.ordering.index import MenuIndex
from app.services.ordering.parser import OrderParser


TEST_RESTAURANT_KEY = "test"


@pytest.fixture
def test_menus_dir():
    """Return path to the directory of test menu YAML files."""
    return Path(__file__).parent / "fixtures" / "menus"


@pytest.fixture
def test_menu_repository(test_menus_dir):
    """Create menu repository with test data."""
    provider = InMemoryMenuProvider(menus_dir=str(test_menus_dir))
    return MenuRepository(provider)


@pytest.fixture
def test_menu(test_menus_dir):
    """The test restaurant's menu, parsed the same way the YAML provider does."""
    with open(test_menus_dir / f"{TEST_RESTAURANT_KEY}.yaml", "r") as f:
        return menu_from_dict(yaml.safe_load(f))


@pytest.fixture
def matcher_config():
    """Matcher settings with default thresholds."""
    return MatcherConfig()


@pytest.fixture
def test_index(test_menu, matcher_config):
    """Menu index built from the test menu."""
    return MenuIndex.build(test_menu, matcher_config)


@pytest.fixture
def index_cache():
    """Fresh index cache per test."""
    return InMemoryIndexCache()


@pytest.fixture
def order_parser(index_cache, matcher_config):
    """Order parser with its own cache."""
    return OrderParser(cache=index_cache, config=matcher_config)


@pytest.fixture
def bread_menu():
    """Small hand-built menu for modifier tests."""
    return Menu(
        categories=[
            MenuCategory(
                name="Sandwiches",
                items=[
                    MenuItem(
                        name="Deli Sandwich",
                        price=Decimal("8.00"),
                        modifiers=[
                            ModifierGroup(
                                name="Bread Choice",
                                required=True,
                                min_selections=1,
                                max_selections=1,
                                multi_select=False,
                                options=[
                                    ModifierOption(name="White Bread"),
                                    ModifierOption(name="Sourdough", price=Decimal("0.50")),
                                ],
                            ),
                            ModifierGroup(
                                name="Toppings",
                                max_selections=2,
                                multi_select=True,
                                options=[
                                    ModifierOption(name="Bacon", price=Decimal("2.00")),
                                    ModifierOption(name="Avocado", price=Decimal("1.50")),
                                    ModifierOption(name="Pickles"),
                                ],
                            ),
                            ModifierGroup(
                                name="Milk",
                                options=[ModifierOption(name="Oat Milk", price=Decimal("0.70"))],
                            ),
                        ],
                    )
                ],
            )
        ]
    )


@pytest.fixture
def test_client(test_menu_repository):
    """Create FastAPI test client with overrides."""
    cache = InMemoryIndexCache()
    app.dependency_overrides[get_menu_repository] = lambda: test_menu_repository
    app.dependency_overrides[get_index_cache] = lambda: cache

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
