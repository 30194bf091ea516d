import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.catalog.resources import ProductResource
from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import result_response, validation_error_response
from backoffice.dashboards.permissions import for_section, section_flags
from backoffice.measurements.resources import CorporateMeasurementResource
from backoffice.parties.resources import CustomerResource

from .constants import BULK_CUSTOM, ORDER_KINDS, ORDER_SIZES, ORDER_STATUS_CHOICES
from .resources import (
    BulkCustomOrderResource, BulkDefaultOrderResource, SingleOrderResource, merged_orders,
)
from .serializers import BulkCustomOrderSerializer, BulkDefaultOrderSerializer, SingleOrderSerializer
from .utils import bulk_id_options, customer_display_name, enrich_bulk_custom, product_display_name

logger = logging.getLogger(__name__)


def _batches(client):
    result = CorporateMeasurementResource(client).cached_list()
    if not result['success']:
        logger.warning(f"Corporate batches unavailable: {result['error']}")
        return []
    return result['data']


def _order_collection(request, dashboard, resource, serializer_class):
    if request.method == 'GET':
        result = resource.list()
        if not result['success']:
            return result_response(result)
        orders = result['data']
        if resource.kind == BULK_CUSTOM:
            orders = enrich_bulk_custom(orders, _batches(resource.client))
        order_status = request.query_params.get('status')
        if order_status:
            orders = [order for order in orders if order.get('status') == order_status]
        return Response({
            'success': True,
            'type': resource.kind,
            'data': orders,
            'permissions': section_flags(dashboard, 'order'),
        })
    else:
        serializer = serializer_class(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        return result_response(resource.create(serializer.validated_data), status.HTTP_201_CREATED)


def _order_detail(request, resource, serializer_class, pk):
    if request.method == 'GET':
        return result_response(resource.get(pk))
    elif request.method in ('PUT', 'PATCH'):
        # Only the fields the form sent are forwarded
        serializer = serializer_class(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        if not serializer.validated_data:
            return validation_error_response({'non_field_errors': ['No valid fields to update']})
        return result_response(resource.update(pk, serializer.validated_data))
    else:  # DELETE
        return result_response(resource.delete(pk))


@api_view(['GET'])
@permission_classes([for_section('order')])
def order_list(request, dashboard):
    """All orders merged into one list, optionally narrowed by type, status or customer"""
    orders = merged_orders(UpstreamClient.from_request(request))

    order_type = request.query_params.get('type')
    if order_type in ORDER_KINDS:
        orders = [order for order in orders if order['order_type'] == order_type]
    order_status = request.query_params.get('status')
    if order_status:
        orders = [order for order in orders if order['status'] == order_status]
    customer_id = request.query_params.get('customer_id')
    if customer_id:
        orders = [order for order in orders if str(order['customer_id']) == customer_id]

    return Response({
        'success': True,
        'data': orders,
        'counts': {kind: sum(1 for order in orders if order['order_type'] == kind) for kind in ORDER_KINDS},
        'permissions': section_flags(dashboard, 'order'),
    })


@api_view(['GET'])
@permission_classes([for_section('order', 'view')])
def order_form_options(request, dashboard):
    """Customer, product, status and size choices for the order forms"""
    client = UpstreamClient.from_request(request)
    customers = CustomerResource(client).cached_list()
    if not customers['success']:
        return result_response(customers)
    products = ProductResource(client).cached_list()
    if not products['success']:
        return result_response(products)

    return Response({
        'success': True,
        'customers': [
            {'id': c.get('id'), 'customer_type': c.get('customer_type'), 'name': customer_display_name(c)}
            for c in customers['data']
        ],
        'products': [{'id': p.get('id'), 'name': product_display_name(p)} for p in products['data']],
        'statuses': [{'value': value, 'label': label} for value, label in ORDER_STATUS_CHOICES],
        'sizes': ORDER_SIZES,
    })


@api_view(['GET'])
@permission_classes([for_section('order', 'view')])
def bulk_id_list(request, dashboard):
    """Corporate measurement batches a bulk custom order can be placed against"""
    result = CorporateMeasurementResource(UpstreamClient.from_request(request)).cached_list()
    if not result['success']:
        return result_response(result)
    return Response({'success': True, 'data': bulk_id_options(result['data'])})


# Single order views
@api_view(['GET', 'POST'])
@permission_classes([for_section('order')])
def single_order_list_create(request, dashboard):
    resource = SingleOrderResource(UpstreamClient.from_request(request))
    return _order_collection(request, dashboard, resource, SingleOrderSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('order')])
def single_order_detail(request, dashboard, pk):
    resource = SingleOrderResource(UpstreamClient.from_request(request))
    return _order_detail(request, resource, SingleOrderSerializer, pk)


# Bulk custom order views
@api_view(['GET', 'POST'])
@permission_classes([for_section('order')])
def bulk_custom_order_list_create(request, dashboard):
    """Bulk custom orders with their batch's customer and product filled in"""
    resource = BulkCustomOrderResource(UpstreamClient.from_request(request))
    return _order_collection(request, dashboard, resource, BulkCustomOrderSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('order')])
def bulk_custom_order_detail(request, dashboard, pk):
    resource = BulkCustomOrderResource(UpstreamClient.from_request(request))
    return _order_detail(request, resource, BulkCustomOrderSerializer, pk)


@api_view(['GET'])
@permission_classes([for_section('order')])
def bulk_custom_order_by_bulk_id(request, dashboard, bulk_id):
    """The bulk custom order placed against a corporate batch"""
    return result_response(BulkCustomOrderResource(UpstreamClient.from_request(request)).by_bulk_id(bulk_id))


# Bulk default order views
@api_view(['GET', 'POST'])
@permission_classes([for_section('order')])
def bulk_default_order_list_create(request, dashboard):
    resource = BulkDefaultOrderResource(UpstreamClient.from_request(request))
    return _order_collection(request, dashboard, resource, BulkDefaultOrderSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('order')])
def bulk_default_order_detail(request, dashboard, pk):
    resource = BulkDefaultOrderResource(UpstreamClient.from_request(request))
    return _order_detail(request, resource, BulkDefaultOrderSerializer, pk)
