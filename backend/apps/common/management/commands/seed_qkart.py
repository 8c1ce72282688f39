from decimal import Decimal

from django.core.management.base import BaseCommand
from django.core.management.color import no_style
from django.db import connection, transaction

from apps.carts.models import Cart, CartItem
from apps.catalog.models import Product
from apps.users.models import User
from apps.users.repositories import UserRepository

# (id, name, category, cost, rating, image)
PRODUCTS = [
    (1, "UNIFACTOR Mens Running Shoes", "Fashion", "50.00", "5.0", ""),
    (2, "YONEX Smash Badminton Racquet", "Sports", "100.00", "5.0", ""),
    (3, "Tan Leatherette Weekender Duffle", "Fashion", "150.00", "4.0", ""),
    (4, "The Minimalist Slim Leather Watch", "Electronics", "60.00", "5.0", ""),
    (5, "Atomberg 1200mm BLDC Ceiling Fan", "Home & Kitchen", "120.00", "4.5", ""),
    (6, "Bonsai Spirit Tree Table Lamp", "Home & Kitchen", "80.00", "4.0", ""),
    (7, "Stylecon 9 Seater RHS Sofa Set", "Home & Kitchen", "650.00", "3.0", ""),
    (8, "Apple iPad Pro with Apple M1 chip", "Electronics", "750.00", "5.0", ""),
]

DEMO_USERS = [
    {
        "username": "crio-user",
        "email": "crio-user@example.com",
        "password": "criouser123",
        "wallet_money": Decimal("5000"),
        "address": "Flat 27, Sunshine Apartments, Bengaluru 560001",
    },
    {
        "username": "crio-newuser",
        "email": "crio-newuser@example.com",
        "password": "criouser123",
        "wallet_money": None,
        "address": None,
    },
]


class Command(BaseCommand):
    help = "Seed the QKart catalogue and demo shoppers."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        users = UserRepository()

        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CartItem.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()
            User.objects.filter(email__in=[u["email"] for u in DEMO_USERS]).delete()

        self.stdout.write("Seeding products...")
        for pid, name, category, cost, rating, image in PRODUCTS:
            Product.objects.update_or_create(
                id=pid,
                defaults=dict(
                    name=name,
                    category=category,
                    cost=Decimal(cost),
                    rating=Decimal(rating),
                    image=image,
                ),
            )

        self.stdout.write("Seeding demo users...")
        for payload in DEMO_USERS:
            user = users.get_by_email(payload["email"])
            if user is None:
                user = User(username=payload["username"], email=payload["email"])
            # None keeps the model defaults (starting balance, placeholder address)
            if payload["wallet_money"] is not None:
                user.wallet_money = payload["wallet_money"]
            if payload["address"] is not None:
                user.address = payload["address"]
            user.set_password(payload["password"])
            user.save()

        # explicit product ids were inserted; move the sequence past them
        sql_list = connection.ops.sequence_reset_sql(no_style(), [Product])
        if sql_list:
            with connection.cursor() as cursor:
                for sql in sql_list:
                    cursor.execute(sql)

        self.stdout.write(self.style.SUCCESS("QKart seed completed."))
