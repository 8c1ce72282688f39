from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def get(self, **filters):
        """Return the matching product, or None when the lookup value cannot be a product key."""
        # ids outside the integer column's range fail while the query is bound
        try:
            return super().get(**filters)
        except (ValueError, TypeError, OverflowError):
            return None
