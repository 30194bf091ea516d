from rest_framework import serializers

from .resources import CORPORATE, CUSTOMER_TYPES, INDIVIDUAL


class CustomerSerializer(serializers.Serializer):
    customer_type = serializers.ChoiceField(choices=CUSTOMER_TYPES)
    email = serializers.EmailField()
    phone_number = serializers.CharField(max_length=32)
    special_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    delivery_address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customer_name = serializers.CharField(required=False, allow_blank=True)
    company_name = serializers.CharField(required=False, allow_blank=True)
    contact_person = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        errors = {}
        if attrs['customer_type'] == INDIVIDUAL:
            if not attrs.get('customer_name'):
                errors['customer_name'] = 'Customer name is required.'
        elif attrs['customer_type'] == CORPORATE:
            for field, label in (('company_name', 'Company name'),
                                 ('contact_person', 'Contact person'),
                                 ('delivery_address', 'Delivery address')):
                if not attrs.get(field):
                    errors[field] = f'{label} is required.'
        if errors:
            raise serializers.ValidationError(errors)
        return attrs
