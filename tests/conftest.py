import pytest

from offcut_tracker.models.records import Order, OrderItem, Product, StockSheet


@pytest.fixture
def plywood() -> Product:
    return Product(id="P1", name="Plywood 18mm", length=2440, width=1220, thickness="18")


@pytest.fixture
def mdf() -> Product:
    return Product(id="P2", name="MDF 12mm", length=2440, width=1220, thickness="12")


@pytest.fixture
def products(plywood, mdf):
    return [plywood, mdf]


@pytest.fixture
def plywood_sheet() -> StockSheet:
    return StockSheet(id="S1", product_id="P1", size="2440x1220",
                      date_received="2024-03-01", status="in-use")


@pytest.fixture
def plywood_order() -> Order:
    """One 600x400 item, five pieces: 1.2 m² of plywood."""
    return Order(order_ref="ORD-001", items=[
        OrderItem(product_id="P1", length=600, width=400, qty=5, unit_cost=10, unit_sale_price=25),
    ])
