import pytest
from ordering.catalog import reset_catalog, set_catalog
from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.notification import reset_sink, set_sink
from ordering.notification.fake_sink import FakeNotificationSink
from protean.integrations.pytest import DomainFixture

SHOP_A = "shop-a"
SHOP_B = "shop-b"


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalog():
    """A small campus catalog: two verified shops, one pending, a handful of products."""
    catalog = InMemoryCatalog()
    catalog.add_shop(SHOP_A, "Kuya's Silog", delivery_fee=15.0)
    catalog.add_shop(SHOP_B, "Brew Corner", delivery_fee=20.0)
    catalog.add_shop("shop-pending", "New Stall", status="pending")

    catalog.add_product("prod-tapsilog", SHOP_A, "Tapsilog", 50.0)
    catalog.add_product("prod-longsilog", SHOP_A, "Longsilog", 30.0)
    catalog.add_product("prod-latte", SHOP_B, "Iced Latte", 100.0)
    catalog.add_product("prod-stall", "shop-pending", "Turon", 15.0)

    set_catalog(catalog)
    yield catalog
    reset_catalog()


@pytest.fixture(autouse=True)
def sink():
    sink = FakeNotificationSink()
    set_sink(sink)
    yield sink
    reset_sink()
