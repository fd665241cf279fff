"""Serializers for request input and for rendering domain models."""

from rest_framework import serializers


class CredentialsSerializer(serializers.Serializer):
    """Input for register and login."""

    handle = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class AddonNamesField(serializers.Field):
    """Accepts a list of names, or one comma-delimited string from older clients.

    Segments of the string are passed on untrimmed, so a blank segment is
    rejected the same way a blank list entry is. An empty string means none.
    """

    default_error_messages = {
        "invalid": "Expected a list of names or a comma-separated string.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            return data.split(",") if data.strip() else []
        if isinstance(data, list) and all(isinstance(item, str) for item in data):
            return data
        self.fail("invalid")

    def to_representation(self, value):
        return list(value)


class PurchaseRequestSerializer(serializers.Serializer):
    """Input for POST /buy."""

    concert_id = serializers.CharField()
    quantity = serializers.IntegerField()
    addon_names = AddonNamesField(required=False, default=list)


class ConcertSerializer(serializers.Serializer):
    """Serializer for Concert domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    artist = serializers.CharField()
    price = serializers.IntegerField(source="price.amount")
    stock = serializers.IntegerField(source="stock.value")
    venue = serializers.CharField()
    date = serializers.DateTimeField()


class ConcertSnapshotSerializer(serializers.Serializer):
    """The concert fields shown next to an order in the history."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    artist = serializers.CharField()
    venue = serializers.CharField()
    date = serializers.DateTimeField()
    price = serializers.IntegerField(source="price.amount")


class AddonSerializer(serializers.Serializer):
    """Serializer for Addon domain model."""

    id = serializers.UUIDField(source="id.value")
    item_name = serializers.CharField()


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.UUIDField(source="id.value")
    buyer_id = serializers.UUIDField(source="buyer_id.value")
    concert_id = serializers.UUIDField(source="concert_id.value")
    quantity = serializers.IntegerField()
    total_price = serializers.IntegerField(source="total_price.amount")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class PurchasedOrderSerializer(OrderSerializer):
    """An order as returned right after purchase, with its add-ons."""

    addons = AddonSerializer(many=True)


class OrderHistoryEntrySerializer(serializers.Serializer):
    """Serializer for OrderHistoryEntry."""

    order = OrderSerializer()
    concert = ConcertSnapshotSerializer()
    addons = AddonSerializer(many=True)
