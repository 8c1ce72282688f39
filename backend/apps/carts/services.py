from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional

from django.db import DatabaseError, IntegrityError, transaction
from rest_framework import status

from apps.api.exceptions import ApiError
from apps.common import get_logger
from .models import Cart, CartItem
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
    UserRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

CART_NOT_FOUND = "User does not have a cart"
CART_REQUIRED = "User does not have a cart. Use POST to create cart and add a product"
CART_CREATION_FAILED = "Internal Server Error"
CART_EMPTY = "Cart is empty"
PRODUCT_NOT_IN_DATABASE = "Product doesn't exist in database"
PRODUCT_ALREADY_IN_CART = (
    "Product already in cart. Use the cart sidebar to update or remove product from cart"
)
PRODUCT_NOT_IN_CART = "Product not in cart"
ADDRESS_NOT_SET = "Address not set"
INSUFFICIENT_BALANCE = "Wallet balance not sufficient to place order"


class CartService:
    """
    Cart use cases for a single user: read the cart, add, update and remove
    line items, and check out against the user's wallet.

    Every rule violation raises ``ApiError`` carrying the HTTP status the
    caller should answer with. Mutations return the cart as re-read from the
    store.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        users: UserRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.users = users
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_cart_by_user(self, user):
        self.logger.debug("Fetching cart", email=user.email)
        cart = self.carts.get(email=user.email)
        if not cart:
            self.logger.warning("Cart not found", email=user.email)
            raise ApiError(status.HTTP_404_NOT_FOUND, CART_NOT_FOUND)
        return self.cart_mapper.to_dto(cart)

    def add_product_to_cart(self, user, product_id, quantity: int):
        self.logger.info(
            "Adding product to cart",
            email=user.email,
            product_id=product_id,
            quantity=quantity,
        )
        cart = self.carts.get(email=user.email)
        if not cart:
            cart = self._create_cart(user)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.warning(
                "Add rejected: product missing", email=user.email, product_id=product_id
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, PRODUCT_NOT_IN_DATABASE)
        items = self._items(cart)
        if self._find_item(items, product.id):
            self.logger.warning(
                "Add rejected: product already in cart",
                cart_id=cart.id,
                product_id=product.id,
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, PRODUCT_ALREADY_IN_CART)
        self.cart_items.create(cart=cart, product=product, quantity=quantity)
        self.logger.info("Product added to cart", cart_id=cart.id, product_id=product.id)
        return self._reload(cart)

    def update_product_in_cart(self, user, product_id, quantity: int):
        self.logger.info(
            "Updating product in cart",
            email=user.email,
            product_id=product_id,
            quantity=quantity,
        )
        cart = self._require_cart(user)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.warning(
                "Update rejected: product missing", cart_id=cart.id, product_id=product_id
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, PRODUCT_NOT_IN_DATABASE)
        item = self._find_item(self._items(cart), product.id)
        if not item:
            self.logger.warning(
                "Update rejected: product not in cart",
                cart_id=cart.id,
                product_id=product.id,
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, PRODUCT_NOT_IN_CART)
        self.cart_items.update(item, quantity=quantity)
        self.logger.info(
            "Cart item quantity replaced",
            cart_id=cart.id,
            product_id=product.id,
            quantity=quantity,
        )
        return self._reload(cart)

    def delete_product_from_cart(self, user, product_id) -> None:
        self.logger.info("Removing product from cart", email=user.email, product_id=product_id)
        cart = self._require_cart(user)
        items = self._items(cart)
        if not items:
            self.logger.warning("Remove rejected: cart is empty", cart_id=cart.id)
            raise ApiError(status.HTTP_400_BAD_REQUEST, CART_EMPTY)
        item = self._find_item(items, product_id)
        if not item:
            self.logger.warning(
                "Remove rejected: product not in cart",
                cart_id=cart.id,
                product_id=product_id,
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, PRODUCT_NOT_IN_CART)
        self.cart_items.delete_product(cart, item.product_id)
        self.logger.info("Product removed from cart", cart_id=cart.id, product_id=item.product_id)

    def checkout(self, user) -> None:
        """
        Debit the cart total from the user's wallet and empty the cart.

        The debit and the clear commit together or not at all.
        """
        self.logger.info("Checking out cart", email=user.email)
        cart = self.carts.get(email=user.email)
        if not cart:
            self.logger.warning("Checkout failed: cart not found", email=user.email)
            raise ApiError(status.HTTP_404_NOT_FOUND, CART_NOT_FOUND)
        items = self._items(cart)
        if not items:
            self.logger.warning("Checkout rejected: cart is empty", cart_id=cart.id)
            raise ApiError(status.HTTP_400_BAD_REQUEST, CART_EMPTY)
        if not user.has_set_non_default_address():
            self.logger.warning("Checkout rejected: address not set", cart_id=cart.id)
            raise ApiError(status.HTTP_400_BAD_REQUEST, ADDRESS_NOT_SET)
        total = self.cart_total(items)
        balance = Decimal(str(user.wallet_money))
        if total > balance:
            self.logger.warning(
                "Checkout rejected: insufficient wallet balance",
                cart_id=cart.id,
                total=str(total),
                balance=str(balance),
            )
            raise ApiError(status.HTTP_400_BAD_REQUEST, INSUFFICIENT_BALANCE)
        previous = user.wallet_money
        try:
            with transaction.atomic():
                self.users.update(user, wallet_money=balance - total)
                self.cart_items.delete_for_cart(cart)
        except Exception:
            # the rollback only reverts the row, not the caller's instance
            user.wallet_money = previous
            self.logger.error("Checkout rolled back", cart_id=cart.id)
            raise
        self.logger.info(
            "Checkout completed",
            cart_id=cart.id,
            charged=str(total),
            remaining=str(user.wallet_money),
        )

    @staticmethod
    def cart_total(items: Iterable[CartItem]) -> Decimal:
        """Sum of ``product.cost * quantity`` over the given line items."""
        total = Decimal("0")
        for item in items:
            total += Decimal(str(item.product.cost)) * item.quantity
        return total

    def _create_cart(self, user) -> Cart:
        try:
            with transaction.atomic():
                cart = self.carts.create(email=user.email)
        except IntegrityError as exc:
            # a concurrent request may have created the cart after our lookup
            existing = self.carts.get(email=user.email)
            if existing:
                self.logger.debug("Cart created concurrently", cart_id=existing.id, email=user.email)
                return existing
            self.logger.error("Cart creation failed", email=user.email, error=str(exc))
            raise ApiError(
                status.HTTP_500_INTERNAL_SERVER_ERROR, CART_CREATION_FAILED
            ) from exc
        except DatabaseError as exc:
            self.logger.error("Cart creation failed", email=user.email, error=str(exc))
            raise ApiError(
                status.HTTP_500_INTERNAL_SERVER_ERROR, CART_CREATION_FAILED
            ) from exc
        if not cart:
            self.logger.error("Cart creation returned nothing", email=user.email)
            raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, CART_CREATION_FAILED)
        self.logger.info("Cart created", cart_id=cart.id, email=user.email)
        return cart

    def _require_cart(self, user) -> Cart:
        cart = self.carts.get(email=user.email)
        if not cart:
            self.logger.warning("Cart mutation rejected: no cart", email=user.email)
            raise ApiError(status.HTTP_400_BAD_REQUEST, CART_REQUIRED)
        return cart

    def _items(self, cart: Cart) -> List[CartItem]:
        return list(self.cart_items.list_for_cart(cart.id))

    @staticmethod
    def _find_item(items: Iterable[CartItem], product_id) -> Optional[CartItem]:
        # ids arrive as path/body strings as often as ints
        wanted = str(product_id)
        for item in items:
            if str(item.product_id) == wanted:
                return item
        return None

    def _reload(self, cart: Cart):
        refreshed = self.carts.get(id=cart.id)
        return self.cart_mapper.to_dto(refreshed or cart)
