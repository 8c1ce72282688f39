from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related("cart_items__product")


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_for_cart(self, cart_id: int):
        return (
            self.model.objects.filter(cart_id=cart_id)
            .select_related("product")
            .order_by("id")
        )

    def delete_product(self, cart: Cart, product_id: int):
        self.model.objects.filter(cart=cart, product_id=product_id).delete()

    def delete_for_cart(self, cart: Cart):
        self.model.objects.filter(cart=cart).delete()
