from rest_framework import serializers

from .utils import SIZE_CHOICES


class ProductSerializer(serializers.Serializer):
    category_name = serializers.CharField(max_length=255)
    base_price = serializers.FloatField(error_messages={'invalid': 'Base price must be a number.'})
    description = serializers.CharField(allow_blank=True)
    style_option = serializers.CharField(allow_blank=True)
    comments = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    customer_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)

    def validate_comments(self, value):
        return value or ''

    def validate_customer_id(self, value):
        # Blank means a default product offered to every customer
        if value is None or str(value).strip() == '':
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            raise serializers.ValidationError('Customer ID must be a number.')


class RequiredFlagField(serializers.Field):
    """``is_required`` sent as a JSON boolean or as text; the upstream stores ``"true"``/``"false"``"""
    default_error_messages = {'invalid': 'Required must be true or false.'}

    def to_internal_value(self, data):
        value = str(data).strip().lower()
        if value not in ('true', 'false'):
            self.fail('invalid')
        return value

    def to_representation(self, value):
        return value


class MeasurementFieldSerializer(serializers.Serializer):
    field_name = serializers.CharField(error_messages={'blank': 'Field name is required.'})
    field_type = serializers.CharField(error_messages={'blank': 'Field type is required.'})
    unit = serializers.CharField(error_messages={'blank': 'Unit is required.'})
    is_required = RequiredFlagField(required=False, default='true')


class MeasurementFieldGroupSerializer(serializers.Serializer):
    """Create and edit form of a product's field group"""
    product_id = serializers.IntegerField(error_messages={
        'required': 'Product selection is required',
        'invalid': 'Product selection is required',
    })
    fields = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate_product_id(self, value):
        if value <= 0:
            raise serializers.ValidationError('Product selection is required')
        return value

    def validate_fields(self, value):
        if not value:
            raise serializers.ValidationError('At least one measurement field is required')
        for index, field in enumerate(value, start=1):
            for key, label in (('field_name', 'Field name'), ('field_type', 'Field type'), ('unit', 'Unit')):
                if not str(field.get(key) or '').strip():
                    raise serializers.ValidationError(f'{label} is required for field {index}')
        return value


class ProductMeasurementSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(error_messages={
        'required': 'Please select a product',
        'invalid': 'Please select a product',
    })
    size = serializers.ChoiceField(choices=SIZE_CHOICES, error_messages={
        'required': 'Please select a size',
        'blank': 'Please select a size',
        'invalid_choice': 'Please select a size',
    })
    measurements = serializers.DictField(required=False, default=dict)

    def validate_product_id(self, value):
        if value <= 0:
            raise serializers.ValidationError('Please select a product')
        return value


def missing_required_measurements(fields, measurements):
    """Messages for required fields left blank; an empty field list is an error of its own"""
    if not fields:
        return ['Cannot create measurements: No measurement fields are configured for the selected product.']
    errors = []
    for field in fields:
        value = measurements.get(str(field.get('id')))
        if str(field.get('is_required')).lower() == 'true' and (value is None or str(value).strip() == ''):
            errors.append(f"{field.get('field_name')} is required")
    return errors
