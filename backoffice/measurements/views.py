import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.catalog.filters import products_for_customer
from backoffice.catalog.resources import MeasurementFieldResource, ProductResource
from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import (
    describe_delete_failure, error_response, result_response, validation_error_response,
)
from backoffice.dashboards.permissions import for_section, section_flags
from backoffice.parties.resources import CUSTOMER_TYPES, CustomerResource

from .resources import CorporateMeasurementResource, IndividualMeasurementResource
from .serializers import CorporateMeasurementSerializer, IndividualMeasurementSerializer
from .utils import (
    corporate_for_edit, filter_corporate_measurements, filter_individual_measurements, individual_for_edit,
)

logger = logging.getLogger(__name__)

INDIVIDUAL = 'individual'
CORPORATE = 'corporate'


def measurement_type(request):
    value = request.query_params.get('type', INDIVIDUAL)
    return value if value in CUSTOMER_TYPES else INDIVIDUAL


@api_view(['GET'])
@permission_classes([for_section('measurement')])
def measurement_list(request, dashboard):
    """Individual or corporate measurements with the screen search applied"""
    client = UpstreamClient.from_request(request)
    kind = measurement_type(request)
    query = request.query_params.get('q', '')

    if kind == CORPORATE:
        result = CorporateMeasurementResource(client).list()
        rows = filter_corporate_measurements(result['data'], query) if result['success'] else None
    else:
        result = IndividualMeasurementResource(client).list()
        rows = filter_individual_measurements(result['data'], query) if result['success'] else None
    if not result['success']:
        return result_response(result)

    return Response({
        'success': True,
        'type': kind,
        'data': rows,
        'permissions': section_flags(dashboard, 'measurement'),
    })


# Individual measurement views
@api_view(['POST'])
@permission_classes([for_section('measurement')])
def individual_measurement_create(request, dashboard):
    """Record a customer's measurements for a product"""
    serializer = IndividualMeasurementSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)
    result = IndividualMeasurementResource(UpstreamClient.from_request(request)).create(serializer.validated_data)
    if result['success']:
        result['message'] = 'Measurement saved successfully'
    return result_response(result, status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('measurement')])
def individual_measurement_detail(request, dashboard, customer_id, product_id):
    """Retrieve (flattened for editing), update or delete an individual measurement"""
    measurements = IndividualMeasurementResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        result = measurements.get(customer_id, product_id)
        if result['success'] and isinstance(result['data'], dict):
            result['data'] = individual_for_edit(result['data'])
        return result_response(result)
    elif request.method in ('PUT', 'PATCH'):
        data = dict(request.data, customer_id=customer_id, product_id=product_id)
        serializer = IndividualMeasurementSerializer(data=data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        result = measurements.update(customer_id, product_id, serializer.validated_data)
        if result['success']:
            result['message'] = 'Measurement updated successfully'
        return result_response(result)
    else:  # DELETE
        result = measurements.delete(customer_id, product_id)
        subject = f'the individual measurement for customer {customer_id} and product {product_id}'
        if result['success']:
            result['message'] = 'Measurement deleted successfully'
        else:
            logger.warning(f"Delete of {subject} failed: {result['error']}")
        return result_response(describe_delete_failure(result, subject))


# Corporate measurement views
@api_view(['POST'])
@permission_classes([for_section('measurement')])
def corporate_measurement_create(request, dashboard):
    """Record a batch of employee measurements for a corporate customer"""
    serializer = CorporateMeasurementSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)
    result = CorporateMeasurementResource(UpstreamClient.from_request(request)).create(serializer.validated_data)
    if result['success']:
        result['message'] = 'Measurement saved successfully'
    return result_response(result, status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('measurement')])
def corporate_measurement_detail(request, dashboard, pk):
    """Retrieve (flattened for editing), update or delete a corporate batch"""
    measurements = CorporateMeasurementResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        result = measurements.get(pk)
        if result['success'] and isinstance(result['data'], dict):
            result['data'] = corporate_for_edit(result['data'])
        return result_response(result)
    elif request.method in ('PUT', 'PATCH'):
        serializer = CorporateMeasurementSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        payload = dict(serializer.validated_data, id=pk)
        result = measurements.update(pk, payload)
        if result['success']:
            result['message'] = 'Measurement updated successfully'
        return result_response(result)
    else:  # DELETE
        result = measurements.delete(pk)
        subject = f'the corporate measurement for batch {pk}'
        if result['success']:
            result['message'] = 'Measurement deleted successfully'
        else:
            logger.warning(f"Delete of {subject} failed: {result['error']}")
        return result_response(describe_delete_failure(result, subject))


# Form helpers
@api_view(['GET'])
@permission_classes([for_section('measurement', 'view')])
def measurement_customers(request, dashboard):
    """Customers of the form's type for the customer picker"""
    kind = measurement_type(request)
    result = CustomerResource(UpstreamClient.from_request(request)).list(kind)
    return result_response(result, type=kind)


@api_view(['GET'])
@permission_classes([for_section('measurement', 'view')])
def measurement_products(request, dashboard):
    """Products a customer can be measured for, defaults first"""
    customer_id = request.query_params.get('customer_id')
    if not customer_id:
        return error_response('Customer ID is required')
    kind = measurement_type(request)
    client = UpstreamClient.from_request(request)

    products = ProductResource(client).cached_list()
    if not products['success']:
        return result_response(products)

    if kind == CORPORATE:
        existing = CorporateMeasurementResource(client).list()
    else:
        existing = IndividualMeasurementResource(client).list()
    if not existing['success']:
        logger.warning(f"Could not fetch existing measurements: {existing['error']}")
    measurements = existing['data'] if existing['success'] else []

    return Response({
        'success': True,
        'data': products_for_customer(products['data'], customer_id, kind, measurements),
    })


@api_view(['GET'])
@permission_classes([for_section('measurement', 'view')])
def measurement_form_fields(request, dashboard, product_id):
    """Measurement field definitions to render for a product"""
    result = MeasurementFieldResource(UpstreamClient.from_request(request)).definitions(product_id)
    return result_response(result)
