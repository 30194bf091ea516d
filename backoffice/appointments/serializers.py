from rest_framework import serializers

APPOINTMENT_TYPES = ('fitting', 'pickup')
APPOINTMENT_STATUSES = ('scheduled', 'confirmed', 'completed', 'cancelled', 'rescheduled')

REQUIRED_MESSAGE = 'Please fill all required fields'
REQUIRED_ERRORS = {'required': REQUIRED_MESSAGE, 'blank': REQUIRED_MESSAGE, 'null': REQUIRED_MESSAGE}


class AppointmentCreateSerializer(serializers.Serializer):
    customer_id = serializers.CharField(error_messages=REQUIRED_ERRORS)
    order_id = serializers.CharField(error_messages=REQUIRED_ERRORS)
    appointment_type = serializers.ChoiceField(
        choices=APPOINTMENT_TYPES,
        error_messages=dict(REQUIRED_ERRORS, invalid_choice='Appointment type must be fitting or pickup'),
    )
    appointment_date = serializers.DateField(error_messages=dict(REQUIRED_ERRORS, invalid='Enter a valid date'))
    appointment_time = serializers.TimeField(error_messages=dict(REQUIRED_ERRORS, invalid='Enter a valid time'))
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)

    def validate_notes(self, value):
        return value or None


class AppointmentUpdateSerializer(serializers.Serializer):
    customer_id = serializers.CharField(required=False, allow_blank=True)
    order_id = serializers.CharField(required=False, allow_blank=True)
    appointment_type = serializers.ChoiceField(choices=APPOINTMENT_TYPES, required=False, allow_blank=True)
    appointment_date = serializers.DateField(required=False, allow_null=True)
    appointment_time = serializers.TimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUSES, required=False, allow_blank=True)


def format_time(value):
    return value.strftime('%H:%M')
