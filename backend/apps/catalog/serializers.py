from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField(allow_blank=True)
    cost = serializers.CharField()
    rating = serializers.CharField()
    image = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "category": instance.category,
                "cost": instance.cost,
                "rating": instance.rating,
                "image": instance.image,
            }
        return super().to_representation(instance)
