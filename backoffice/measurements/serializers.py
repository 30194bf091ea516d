from rest_framework import serializers


class IndividualMeasurementSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(error_messages={
        'required': 'Customer ID is required',
        'null': 'Customer ID is required',
        'invalid': 'Customer ID is required',
    })
    product_id = serializers.IntegerField(error_messages={
        'required': 'Product ID is required',
        'null': 'Product ID is required',
        'invalid': 'Product ID is required',
    })
    measurements = serializers.DictField(required=False, default=dict)


class EmployeeSerializer(serializers.Serializer):
    employee_code = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    employee_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    measurements = serializers.DictField(required=False, default=dict)


class CorporateMeasurementSerializer(serializers.Serializer):
    corporate_customer_id = serializers.IntegerField(error_messages={
        'required': 'Corporate Customer ID is required',
        'null': 'Corporate Customer ID is required',
        'invalid': 'Corporate Customer ID is required',
    })
    product_id = serializers.IntegerField(error_messages={
        'required': 'Product ID is required',
        'null': 'Product ID is required',
        'invalid': 'Product ID is required',
    })
    batch_name = serializers.CharField(error_messages={
        'required': 'Batch Name is required',
        'blank': 'Batch Name is required',
        'null': 'Batch Name is required',
    })
    employees = EmployeeSerializer(many=True, required=False, default=list)

    def validate_employees(self, value):
        if not value:
            raise serializers.ValidationError('At least one employee is required')
        for index, employee in enumerate(value, start=1):
            if not (employee.get('employee_code') or '').strip():
                raise serializers.ValidationError(f'Employee {index}: Employee Code is required')
            if not (employee.get('employee_name') or '').strip():
                raise serializers.ValidationError(f'Employee {index}: Employee Name is required')
        return value

    def validate(self, attrs):
        attrs['no_of_employees'] = len(attrs['employees'])
        return attrs
