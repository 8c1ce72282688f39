from typing import Iterable, List, Optional
from .models import Cart, CartItem
from .dtos import CartDTO, CartItemDTO
from apps.catalog.mappers import ProductMapper


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            product=self.product_mapper.to_dto(item.product), quantity=item.quantity
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, cart_item_mapper: Optional[CartItemMapper] = None) -> None:
        self.cart_item_mapper = cart_item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart) -> CartDTO:
        items = self.cart_item_mapper.many_to_dto(cart.cart_items.all())
        return CartDTO(id=cart.id, email=cart.email, items=items)
