"""Catalog port (abstract interface).

Shops and products are owned by the catalog subsystem; ordering only reads
them. Adapters return immutable records so a lookup can never be used to
mutate catalog state from inside an ordering transaction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ShopStatus(Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    INACTIVE = "inactive"


class ProductStatus(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    SOLD_OUT = "sold_out"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class ShopRecord:
    """A shop as seen by ordering."""

    shop_id: str
    name: str
    status: str = ShopStatus.PENDING.value
    delivery_fee: float = 0.0

    @property
    def is_verified(self) -> bool:
        return self.status == ShopStatus.VERIFIED.value


@dataclass(frozen=True)
class ProductRecord:
    """A menu product as seen by ordering."""

    product_id: str
    shop_id: str
    name: str
    price: float
    status: str = ProductStatus.AVAILABLE.value

    @property
    def is_available(self) -> bool:
        return self.status == ProductStatus.AVAILABLE.value


class CatalogReader(ABC):
    """Read-only access to shops and products."""

    @abstractmethod
    def shop_by_id(self, shop_id: str) -> ShopRecord | None:
        """Return the shop, or None if it does not exist."""
        ...

    @abstractmethod
    def product_by_id(self, product_id: str) -> ProductRecord | None:
        """Return the product, or None if it does not exist."""
        ...

    @abstractmethod
    def products_by_shop(self, shop_id: str) -> list[ProductRecord]:
        """Return every product listed by the shop."""
        ...

    def is_shop_verified(self, shop_id: str) -> bool:
        shop = self.shop_by_id(shop_id)
        return shop is not None and shop.is_verified

    def is_product_available(self, product_id: str) -> bool:
        product = self.product_by_id(product_id)
        return product is not None and product.is_available
