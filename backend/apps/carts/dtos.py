from dataclasses import dataclass
from typing import List
from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    product: ProductDTO
    quantity: int


@dataclass
class CartDTO:
    id: int
    email: str
    items: List[CartItemDTO]
