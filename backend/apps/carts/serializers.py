from rest_framework import serializers
from apps.catalog.serializers import ProductReadSerializer


class CartItemSerializer(serializers.Serializer):
    product = ProductReadSerializer()
    quantity = serializers.IntegerField()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    cartItems = CartItemSerializer(many=True, source="items")


class CartItemWriteSerializer(serializers.Serializer):
    # Callers validate input here; the service trusts the quantity it is given.
    productId = serializers.IntegerField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)
