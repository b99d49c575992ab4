"""Who is acting on an order.

Customers, shops and admins share one shape, an id plus a role tag, rather
than a class hierarchy. Ownership checks compare the id against the order
field that the role owns.
"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    SHOP = "shop"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: Role

    @classmethod
    def customer(cls, customer_id) -> "Actor":
        return cls(user_id=str(customer_id), role=Role.CUSTOMER)

    @classmethod
    def shop(cls, shop_id) -> "Actor":
        return cls(user_id=str(shop_id), role=Role.SHOP)

    @classmethod
    def admin(cls, admin_id) -> "Actor":
        return cls(user_id=str(admin_id), role=Role.ADMIN)
