import unittest
from decimal import Decimal

from apps.carts.mappers import CartItemMapper, CartMapper
from apps.carts.serializers import CartItemWriteSerializer, CartReadSerializer


class StubProduct:
    def __init__(self, product_id: int, name: str, cost):
        self.id = product_id
        self.name = name
        self.category = "Electronics"
        self.cost = cost
        self.rating = Decimal("4.5")
        self.image = "watch.png"


class StubCartItem:
    def __init__(self, product: StubProduct, quantity: int):
        self.product = product
        self.quantity = quantity


class StubCartItemsManager:
    def __init__(self, items):
        self._items = list(items)

    def all(self):
        return list(self._items)


class StubCart:
    def __init__(self, cart_id: int, email: str, items):
        self.id = cart_id
        self.email = email
        self.cart_items = StubCartItemsManager(items)


class CartMapperTests(unittest.TestCase):
    def test_cart_item_mapper(self):
        dto = CartItemMapper().to_dto(StubCartItem(StubProduct(4, "Watch", Decimal("60.00")), 2))
        self.assertEqual(dto.quantity, 2)
        self.assertEqual(dto.product.id, 4)
        self.assertEqual(dto.product.cost, "60.00")
        self.assertEqual(dto.product.rating, "4.5")

    def test_cart_mapper_keeps_item_order(self):
        cart = StubCart(
            7,
            "owner@example.com",
            [
                StubCartItem(StubProduct(2, "Racquet", Decimal("100")), 1),
                StubCartItem(StubProduct(1, "Shoes", Decimal("50")), 3),
            ],
        )
        dto = CartMapper().to_dto(cart)
        self.assertEqual(dto.id, 7)
        self.assertEqual(dto.email, "owner@example.com")
        self.assertEqual([i.product.id for i in dto.items], [2, 1])


class CartSerializerTests(unittest.TestCase):
    def test_read_serializer_renders_dto(self):
        cart = StubCart(3, "owner@example.com", [StubCartItem(StubProduct(1, "Shoes", Decimal("50.00")), 2)])
        data = CartReadSerializer(CartMapper().to_dto(cart)).data
        self.assertEqual(data["id"], 3)
        self.assertEqual(data["email"], "owner@example.com")
        self.assertEqual(data["cartItems"][0]["quantity"], 2)
        self.assertEqual(data["cartItems"][0]["product"]["name"], "Shoes")
        self.assertEqual(data["cartItems"][0]["product"]["cost"], "50.00")

    def test_write_serializer_maps_product_id(self):
        serializer = CartItemWriteSerializer(data={"productId": "5", "quantity": 2})
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data, {"product_id": 5, "quantity": 2})

    def test_write_serializer_rejects_non_positive_quantity(self):
        serializer = CartItemWriteSerializer(data={"productId": 5, "quantity": 0})
        self.assertFalse(serializer.is_valid())
        self.assertIn("quantity", serializer.errors)


if __name__ == "__main__":
    unittest.main()
