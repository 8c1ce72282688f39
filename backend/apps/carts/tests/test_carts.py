from decimal import Decimal
from unittest.mock import patch

from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings
from rest_framework import status

from apps.api.exceptions import ApiError
from apps.carts.container import build_cart_service
from apps.carts.models import Cart, CartItem
from apps.carts.repositories import CartItemRepository
from apps.catalog.models import Product
from apps.users.models import User


@override_settings(DEFAULT_ADDRESS="ADDRESS_NOT_SET", DEFAULT_WALLET_MONEY=Decimal("500"))
class CartPersistenceTests(TestCase):
    def setUp(self):
        self.service = build_cart_service()
        self.user = User.objects.create_user(
            username="cartuser",
            password="TestPass123",
            email="cart@example.com",
            wallet_money=Decimal("250"),
            address="221B Baker Street",
        )
        self.shoes = Product.objects.create(name="Running Shoes", category="Fashion", cost=Decimal("100.00"))
        self.racquet = Product.objects.create(name="Racquet", category="Sports", cost=Decimal("25.00"))

    def test_one_cart_per_email_enforced_by_store(self):
        Cart.objects.create(email="dupe@example.com")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Cart.objects.create(email="dupe@example.com")

    def test_one_item_per_product_enforced_by_store(self):
        cart = Cart.objects.create(email="items@example.com")
        CartItem.objects.create(cart=cart, product=self.shoes, quantity=1)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                CartItem.objects.create(cart=cart, product=self.shoes, quantity=2)

    def test_add_update_delete_round(self):
        dto = self.service.add_product_to_cart(self.user, self.shoes.id, 1)
        self.assertEqual(Cart.objects.filter(email=self.user.email).count(), 1)
        self.assertEqual(dto.items[0].product.name, "Running Shoes")

        self.service.add_product_to_cart(self.user, str(self.racquet.id), 2)
        dto = self.service.update_product_in_cart(self.user, self.shoes.id, 3)
        self.assertEqual(
            [(i.product.id, i.quantity) for i in dto.items],
            [(self.shoes.id, 3), (self.racquet.id, 2)],
        )

        self.service.delete_product_from_cart(self.user, self.shoes.id)
        remaining = self.service.get_cart_by_user(self.user).items
        self.assertEqual([i.product.id for i in remaining], [self.racquet.id])

    def test_non_numeric_product_id_is_bad_request(self):
        with self.assertRaises(ApiError) as ctx:
            self.service.add_product_to_cart(self.user, "5f2e9c1b", 1)
        self.assertEqual(ctx.exception.status_code, status.HTTP_400_BAD_REQUEST)

    def test_out_of_range_product_id_is_bad_request(self):
        with self.assertRaises(ApiError) as ctx:
            self.service.add_product_to_cart(self.user, 10**30, 1)
        self.assertEqual(ctx.exception.message, "Product doesn't exist in database")

    def test_checkout_debits_wallet_and_empties_cart(self):
        self.service.add_product_to_cart(self.user, self.shoes.id, 2)
        self.service.checkout(self.user)
        self.user.refresh_from_db()
        self.assertEqual(self.user.wallet_money, Decimal("50.00"))
        cart = Cart.objects.get(email=self.user.email)
        self.assertFalse(cart.cart_items.exists())

    def test_checkout_requires_address(self):
        newcomer = User.objects.create_user(
            username="newcomer", password="TestPass123", email="new@example.com"
        )
        self.assertEqual(newcomer.wallet_money, Decimal("500"))
        self.service.add_product_to_cart(newcomer, self.shoes.id, 1)
        with self.assertRaises(ApiError) as ctx:
            self.service.checkout(newcomer)
        self.assertEqual(ctx.exception.message, "Address not set")

    def test_checkout_rolls_back_debit_when_clearing_fails(self):
        self.service.add_product_to_cart(self.user, self.shoes.id, 2)
        with patch.object(
            CartItemRepository, "delete_for_cart", side_effect=RuntimeError("store down")
        ):
            with self.assertRaises(RuntimeError):
                self.service.checkout(self.user)
        self.assertEqual(self.user.wallet_money, Decimal("250"))
        # a later save on the same instance must not persist the debit
        self.user.save()
        self.user.refresh_from_db()
        self.assertEqual(self.user.wallet_money, Decimal("250.00"))
        self.assertEqual(
            CartItem.objects.filter(cart__email=self.user.email).count(), 1
        )
