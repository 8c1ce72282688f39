from decimal import Decimal

from django.test import TestCase, override_settings

from apps.users.models import User
from apps.users.repositories import UserRepository


@override_settings(DEFAULT_ADDRESS="ADDRESS_NOT_SET", DEFAULT_WALLET_MONEY=Decimal("500"))
class UserModelTests(TestCase):
    def test_new_user_gets_wallet_and_placeholder_address(self):
        user = User.objects.create_user(
            username="fresh", password="TestPass123", email="fresh@example.com"
        )
        self.assertEqual(user.wallet_money, Decimal("500"))
        self.assertEqual(user.address, "ADDRESS_NOT_SET")
        self.assertFalse(user.has_set_non_default_address())

    def test_custom_address_counts_as_set(self):
        user = User(username="moved", email="moved@example.com", address="12 Park Lane")
        self.assertTrue(user.has_set_non_default_address())

    def test_blank_address_is_not_set(self):
        user = User(username="blank", email="blank@example.com", address="")
        self.assertFalse(user.has_set_non_default_address())

    def test_repository_updates_wallet_only(self):
        user = User.objects.create_user(
            username="payer", password="TestPass123", email="payer@example.com"
        )
        repo = UserRepository()
        repo.update(user, wallet_money=Decimal("120.50"))
        self.assertEqual(repo.get_by_email("payer@example.com").wallet_money, Decimal("120.50"))
