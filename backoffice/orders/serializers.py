from rest_framework import serializers

from .constants import ORDER_CONFIRMED, ORDER_STATUS_CHOICES


def required_id(label):
    return serializers.IntegerField(min_value=1, error_messages={
        'required': f'{label} is required',
        'null': f'{label} is required',
        'invalid': f'{label} is required',
        'min_value': f'{label} is required',
    })


def price_field():
    return serializers.FloatField(min_value=0, error_messages={
        'required': 'Unit price is required',
        'null': 'Unit price is required',
        'invalid': 'Enter a valid unit price',
        'min_value': 'Unit price cannot be negative',
    })


def status_field():
    return serializers.ChoiceField(choices=ORDER_STATUS_CHOICES, default=ORDER_CONFIRMED, error_messages={
        'invalid_choice': 'Select a valid order status',
    })


def text_field():
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')


class SingleOrderSerializer(serializers.Serializer):
    customerid = required_id('Customer')
    productid = required_id('Product')
    quantity = serializers.IntegerField(min_value=1, default=1, error_messages={
        'invalid': 'Quantity must be a whole number',
        'min_value': 'Quantity must be at least 1',
    })
    unitprice = price_field()
    status = status_field()
    stylepreference = text_field()
    speacial_requests = text_field()


class BulkCustomOrderSerializer(serializers.Serializer):
    Bulkid = required_id('Bulk ID')
    unit_price = price_field()
    quantity = serializers.IntegerField(min_value=1, default=1, error_messages={
        'invalid': 'Quantity must be a whole number',
        'min_value': 'Quantity must be at least 1',
    })
    status = status_field()
    stylepreference = text_field()
    speacial_requests = text_field()


class BulkDefaultOrderSerializer(serializers.Serializer):
    CustomerID = required_id('Customer')
    ProductID = required_id('Product')
    quantity_by_size = serializers.DictField(
        child=serializers.IntegerField(min_value=0, error_messages={
            'invalid': 'Quantities must be whole numbers',
            'min_value': 'Quantities cannot be negative',
        }),
    )
    unitprice = price_field()
    status = status_field()
    style_preference = text_field()
    speacial_request = text_field()

    def validate_quantity_by_size(self, value):
        quantities = {size: quantity for size, quantity in value.items() if quantity}
        if not quantities:
            raise serializers.ValidationError('Enter a quantity for at least one size')
        return quantities
