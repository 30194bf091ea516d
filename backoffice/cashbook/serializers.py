from rest_framework import serializers

from .utils import serialize_references


class ReferenceSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    type = serializers.CharField(required=False, allow_blank=True, default='')
    name = serializers.CharField(required=False, allow_blank=True, default='')
    detail = serializers.CharField(required=False, allow_blank=True, default='')


class CashbookEntrySerializer(serializers.Serializer):
    amount = serializers.FloatField(min_value=0.01, error_messages={
        'required': 'Amount is required',
        'null': 'Amount is required',
        'invalid': 'Please enter a valid amount',
        'min_value': 'Amount must be greater than 0',
    })
    description = serializers.CharField(trim_whitespace=True, error_messages={
        'required': 'Description is required',
        'blank': 'Description is required',
        'null': 'Description is required',
    })
    transaction_date = serializers.DateField(error_messages={
        'required': 'Transaction date is required',
        'null': 'Transaction date is required',
        'invalid': 'Enter a valid transaction date',
    })
    references = ReferenceSerializer(many=True, required=False)
    special_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_payload(self):
        """Upstream body for the fields that were submitted"""
        data = self.validated_data
        payload = {}
        if 'amount' in data:
            payload['amount'] = data['amount']
        if 'description' in data:
            payload['description'] = data['description']
        if 'transaction_date' in data:
            payload['transaction_date'] = data['transaction_date'].isoformat()
        if 'references' in data or not self.partial:
            payload['references'], payload['reference_details'] = serialize_references(data.get('references'))
        if 'special_notes' in data or not self.partial:
            payload['special_notes'] = data.get('special_notes') or None
        return payload
