"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `nullfix` and `tests.unit...` import.
"""

from unittest.mock import MagicMock

import pytest

from nullfix.domain.location import ClassRef, Location, MethodRef, SourceUnit, SymbolRef


@pytest.fixture
def telemetry() -> MagicMock:
    return MagicMock()


@pytest.fixture
def source() -> SourceUnit:
    return SourceUnit(package="shop.cart", uri="file:///src/shop/cart/basket.py")


@pytest.fixture
def basket_class() -> ClassRef:
    return ClassRef("shop.cart.basket.Basket")


@pytest.fixture
def add_item() -> MethodRef:
    return MethodRef(
        name="add_item",
        parameters=(
            SymbolRef("self"),
            SymbolRef("item", annotations=("Item",)),
            SymbolRef("quantity", annotations=("Annotated[int, Nonnull]", "Nonnull")),
        ),
    )


@pytest.fixture
def field_location(source: SourceUnit, basket_class: ClassRef) -> Location:
    return Location.for_field(source, basket_class, SymbolRef("discount"))
