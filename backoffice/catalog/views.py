import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import (
    describe_delete_failure, error_response, result_response, validation_error_response,
)
from backoffice.dashboards.permissions import for_section, section_flags

from .filters import filter_field_groups, filter_product_measurements, filter_products, product_names
from .resources import PRODUCT_FILTERS, MeasurementFieldResource, ProductMeasurementResource, ProductResource
from .serializers import (
    MeasurementFieldGroupSerializer, MeasurementFieldSerializer, ProductMeasurementSerializer,
    ProductSerializer, missing_required_measurements,
)
from .utils import SIZE_LABELS, format_size, size_from_label, sync_measurement_fields

logger = logging.getLogger(__name__)


# Product views
@api_view(['GET', 'POST'])
@permission_classes([for_section('product')])
def product_list_create(request, dashboard):
    """List products (upstream filters plus local search) or create a product"""
    products = ProductResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        filters = {key: request.query_params.get(key) for key in PRODUCT_FILTERS}
        if any(filters.values()):
            result = products.list(filters)
        else:
            result = products.cached_list()
        if not result['success']:
            return result_response(result)
        return Response({
            'success': True,
            'data': filter_products(result['data'], request.query_params.get('q', '')),
            'count': len(result['data']),
            'permissions': section_flags(dashboard, 'product'),
        })
    else:
        serializer = ProductSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        return result_response(products.create(serializer.validated_data), status.HTTP_201_CREATED)


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('product')])
def product_detail(request, dashboard, pk):
    """Update or delete a product"""
    products = ProductResource(UpstreamClient.from_request(request))

    if request.method in ('PUT', 'PATCH'):
        serializer = ProductSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        return result_response(products.update(pk, serializer.validated_data))
    else:  # DELETE
        return result_response(products.delete(pk))


# Measurement field views
@api_view(['GET', 'POST'])
@permission_classes([for_section('measurement_field')])
def measurement_field_list_create(request, dashboard):
    """List field groups per product or bulk create a product's fields"""
    client = UpstreamClient.from_request(request)
    fields = MeasurementFieldResource(client)

    if request.method == 'GET':
        result = fields.grouped()
        if not result['success']:
            return result_response(result)
        product_result = ProductResource(client).cached_list()
        names = product_names(product_result['data']) if product_result['success'] else {}
        groups = [
            dict(group, product_name=names.get(str(group.get('product_id'))) or f"Product ID: {group.get('product_id')}")
            for group in result['data']
        ]
        return Response({
            'success': True,
            'data': filter_field_groups(groups, names, request.query_params.get('q', '')),
            'permissions': section_flags(dashboard, 'measurement_field'),
        })
    else:
        serializer = MeasurementFieldGroupSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        field_serializer = MeasurementFieldSerializer(data=serializer.validated_data['fields'], many=True)
        if not field_serializer.is_valid():
            return validation_error_response(field_serializer.errors)
        result = fields.bulk_create(serializer.validated_data['product_id'], field_serializer.validated_data)
        return result_response(result, status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([for_section('measurement_field')])
def measurement_field_product(request, dashboard, product_id):
    """
    Fields of one product.

    PUT synchronises the stored fields with the submitted list by position,
    DELETE removes every field of the product.
    """
    fields = MeasurementFieldResource(UpstreamClient.from_request(request))
    existing = fields.for_product(product_id)

    if request.method == 'GET':
        return result_response(existing)
    if not existing['success']:
        return result_response(existing)

    if request.method == 'PUT':
        serializer = MeasurementFieldGroupSerializer(data={
            'product_id': product_id,
            'fields': request.data.get('fields', []),
        })
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        result = sync_measurement_fields(fields, product_id, existing['data'], serializer.validated_data['fields'])
        if result['success']:
            result['message'] = 'Measurement fields have been updated successfully.'
        return result_response(result)
    else:  # DELETE
        result = fields.delete_for_product(existing['data'])
        if result['success']:
            result['message'] = 'All measurement fields for the product have been deleted successfully.'
        return result_response(result)


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('measurement_field')])
def measurement_field_detail(request, dashboard, pk):
    """Update or delete a single measurement field"""
    fields = MeasurementFieldResource(UpstreamClient.from_request(request))

    if request.method in ('PUT', 'PATCH'):
        serializer = MeasurementFieldSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        data = dict(serializer.validated_data)
        data['field_name'] = data['field_name'].strip()
        data['unit'] = data['unit'].strip()
        return result_response(fields.update(pk, data))
    else:  # DELETE
        return result_response(fields.delete(pk))


# Product (size) measurement views
@api_view(['GET', 'POST'])
@permission_classes([for_section('product_measurement')])
def product_measurement_list_create(request, dashboard):
    """List standard size measurements or create one"""
    client = UpstreamClient.from_request(request)
    measurements = ProductMeasurementResource(client)

    if request.method == 'GET':
        result = measurements.list()
        if not result['success']:
            return result_response(result)
        rows = [dict(m, size_label=format_size(m.get('size'))) for m in result['data']]
        return Response({
            'success': True,
            'data': filter_product_measurements(rows, request.query_params.get('q', '')),
            'sizes': [{'value': value, 'label': label} for value, label in SIZE_LABELS.items()],
            'permissions': section_flags(dashboard, 'product_measurement'),
        })
    else:
        return _save_product_measurement(request, client, measurements)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([for_section('product_measurement')])
def product_measurement_detail(request, dashboard, pk):
    """Retrieve or update a size measurement"""
    client = UpstreamClient.from_request(request)
    measurements = ProductMeasurementResource(client)

    if request.method == 'GET':
        return result_response(measurements.get(pk))
    return _save_product_measurement(request, client, measurements, pk)


def _save_product_measurement(request, client, measurements, pk=None):
    data = dict(request.data)
    if data.get('size') and data['size'] not in SIZE_LABELS:
        data['size'] = size_from_label(data['size']) or data['size']
    serializer = ProductMeasurementSerializer(data=data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)

    payload = serializer.validated_data
    definitions = MeasurementFieldResource(client).definitions(payload['product_id'])
    if not definitions['success']:
        return result_response(definitions)
    missing = missing_required_measurements(definitions['data'], payload['measurements'])
    if missing:
        return validation_error_response({'measurements': missing})

    label = format_size(payload['size'])
    if pk is None:
        result = measurements.create(payload)
        if result['success']:
            result['message'] = f'Measurement (Size: {label}) has been created successfully!'
        return result_response(result, status.HTTP_201_CREATED)
    result = measurements.update(pk, payload)
    if result['success']:
        result['message'] = f'Measurement (Size: {label}) has been updated successfully!'
    return result_response(result)


@api_view(['GET'])
@permission_classes([for_section('product_measurement')])
def product_measurement_fields(request, dashboard, product_id):
    """Field definitions to render the size measurement form of a product"""
    fields = MeasurementFieldResource(UpstreamClient.from_request(request))
    return result_response(fields.definitions(product_id))


@api_view(['GET', 'DELETE'])
@permission_classes([for_section('product_measurement')])
def product_measurement_by_size(request, dashboard, product_id, size):
    """Retrieve or delete the measurement of a product in one size"""
    measurements = ProductMeasurementResource(UpstreamClient.from_request(request))
    size_value = size_from_label(size)
    if size_value is None:
        return error_response('Please select a size')

    if request.method == 'GET':
        return result_response(measurements.get_by_size(product_id, size_value))

    result = measurements.delete_by_size(product_id, size_value)
    subject = f'the product measurement for product {product_id} (Size: {format_size(size_value)})'
    if result['success']:
        result['message'] = f'Deleted {subject}.'
    else:
        logger.warning(f"Delete of {subject} failed: {result['error']}")
    return result_response(describe_delete_failure(result, subject))
