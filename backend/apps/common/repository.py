from typing import Generic, Optional, Type, TypeVar

from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM gateway shared by the per-app repositories."""

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self):
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **fields) -> T:
        for k, v in fields.items():
            setattr(obj, k, v)
        # persist only the assigned columns
        obj.save(update_fields=list(fields) or None)
        return obj
