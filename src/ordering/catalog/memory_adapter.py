"""In-memory catalog adapter: holds shops and products in process memory."""

from dataclasses import replace

from ordering.catalog.port import CatalogReader, ProductRecord, ProductStatus, ShopRecord, ShopStatus


class InMemoryCatalog(CatalogReader):
    """Catalog adapter backed by dicts, seeded by tests and local development."""

    def __init__(self):
        self.shops: dict[str, ShopRecord] = {}
        self.products: dict[str, ProductRecord] = {}

    # -------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------
    def add_shop(
        self,
        shop_id: str,
        name: str,
        status: str = ShopStatus.VERIFIED.value,
        delivery_fee: float = 0.0,
    ) -> ShopRecord:
        shop = ShopRecord(shop_id=shop_id, name=name, status=status, delivery_fee=delivery_fee)
        self.shops[shop_id] = shop
        return shop

    def add_product(
        self,
        product_id: str,
        shop_id: str,
        name: str,
        price: float,
        status: str = ProductStatus.AVAILABLE.value,
    ) -> ProductRecord:
        product = ProductRecord(product_id=product_id, shop_id=shop_id, name=name, price=price, status=status)
        self.products[product_id] = product
        return product

    def set_price(self, product_id: str, price: float) -> None:
        self.products[product_id] = replace(self.products[product_id], price=price)

    def set_product_status(self, product_id: str, status: str) -> None:
        self.products[product_id] = replace(self.products[product_id], status=status)

    def remove_product(self, product_id: str) -> None:
        self.products.pop(product_id, None)

    def reset(self):
        """Forget all shops and products (useful between tests)."""
        self.shops.clear()
        self.products.clear()

    # -------------------------------------------------------------------
    # CatalogReader
    # -------------------------------------------------------------------
    def shop_by_id(self, shop_id: str) -> ShopRecord | None:
        return self.shops.get(str(shop_id))

    def product_by_id(self, product_id: str) -> ProductRecord | None:
        return self.products.get(str(product_id))

    def products_by_shop(self, shop_id: str) -> list[ProductRecord]:
        return [p for p in self.products.values() if p.shop_id == str(shop_id)]
