from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            cost=str(product.cost),
            rating=str(product.rating),
            image=product.image,
        )
