from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product
    from apps.users.models import User


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Cart]:
        ...

    def create(self, **data) -> Cart:
        ...


class CartItemRepositoryProtocol(Protocol):
    def create(self, **data) -> CartItem:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartItem]:
        ...

    def update(self, item: CartItem, **fields) -> CartItem:
        ...

    def delete_product(self, cart: Cart, product_id: int) -> None:
        ...

    def delete_for_cart(self, cart: Cart) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class UserRepositoryProtocol(Protocol):
    def update(self, user: "User", **fields) -> "User":
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...
