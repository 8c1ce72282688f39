from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


def default_wallet_money():
    return settings.DEFAULT_WALLET_MONEY


def default_address():
    return settings.DEFAULT_ADDRESS


class User(AbstractUser):
    # id, username, password, is_active, is_staff, is_superuser are inherited
    email = models.EmailField(unique=True)
    wallet_money = models.DecimalField(
        max_digits=12, decimal_places=2, default=default_wallet_money
    )
    address = models.TextField(default=default_address)

    def __str__(self):
        return self.email or self.username

    def has_set_non_default_address(self) -> bool:
        """True once the user replaced the placeholder shipping address."""
        return bool(self.address) and self.address != settings.DEFAULT_ADDRESS
