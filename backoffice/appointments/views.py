import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import error_response, result_response, validation_error_response
from backoffice.dashboards.permissions import for_section, section_flags
from backoffice.measurements.resources import CorporateMeasurementResource
from backoffice.orders.resources import BulkDefaultOrderResource, merged_orders
from backoffice.orders.utils import find_merged_order
from backoffice.parties.resources import CustomerResource

from .resources import APPOINTMENT_FILTERS, AppointmentResource
from .serializers import AppointmentCreateSerializer, AppointmentUpdateSerializer, format_time
from .utils import customer_options, filter_appointments, orders_for_selection, parse_selection

logger = logging.getLogger(__name__)


def _lookup_data(result, name):
    if not result['success']:
        logger.warning(f"{name} unavailable for the appointment form: {result['error']}")
        return []
    return result['data']


def build_customer_options(client):
    customers = CustomerResource(client).cached_list()
    if not customers['success']:
        return customers
    batches = _lookup_data(CorporateMeasurementResource(client).cached_list(), 'Corporate batches')
    default_orders = _lookup_data(BulkDefaultOrderResource(client).list(), 'Bulk default orders')
    return {'success': True, 'data': customer_options(customers['data'], batches, default_orders)}


@api_view(['GET', 'POST'])
@permission_classes([for_section('appointment')])
def appointment_list_create(request, dashboard):
    """List appointments (upstream filters plus the screen tabs and search) or schedule one"""
    client = UpstreamClient.from_request(request)
    appointments = AppointmentResource(client)

    if request.method == 'GET':
        params = request.query_params
        result = appointments.list({key: params.get(key) for key in APPOINTMENT_FILTERS})
        if not result['success']:
            return result_response(result)
        today = timezone.localdate().isoformat()
        rows = filter_appointments(
            result['data'],
            appointment_type=params.get('type'),
            tab=params.get('tab'),
            date=params.get('date'),
            query=params.get('q', ''),
            today=today,
        )
        return Response({
            'success': True,
            'data': rows,
            'today': today,
            'today_count': sum(1 for a in result['data'] if a.get('appointment_date') == today),
            'permissions': section_flags(dashboard, 'appointment'),
        })

    serializer = AppointmentCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)
    data = serializer.validated_data

    customer_id, _ = parse_selection(data['customer_id'])
    order = find_merged_order(merged_orders(client), data['order_id'])
    if order is None or not order.get('original_id'):
        return error_response('Invalid order selection - order ID not found')
    if customer_id is None:
        return error_response('Invalid customer or order selection')

    payload = {
        'customer_id': customer_id,
        'order_id': order['original_id'],
        'appointment_type': data['appointment_type'],
        'appointment_date': data['appointment_date'].isoformat(),
        'appointment_time': format_time(data['appointment_time']),
        'status': 'scheduled',
        'notes': data['notes'],
    }
    return result_response(appointments.create(payload), status.HTTP_201_CREATED)


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('appointment')])
def appointment_detail(request, dashboard, pk):
    """Reschedule, change or delete an appointment"""
    client = UpstreamClient.from_request(request)
    appointments = AppointmentResource(client)

    if request.method == 'DELETE':
        return result_response(appointments.delete(pk))

    serializer = AppointmentUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)
    data = serializer.validated_data

    payload = {}
    if data.get('appointment_type'):
        payload['appointment_type'] = data['appointment_type']
    if data.get('appointment_date'):
        payload['appointment_date'] = data['appointment_date'].isoformat()
    if data.get('appointment_time'):
        payload['appointment_time'] = format_time(data['appointment_time'])
    if data.get('order_id'):
        order = find_merged_order(merged_orders(client), data['order_id'])
        if order is not None and order.get('original_id'):
            payload['order_id'] = order['original_id']
    if data.get('customer_id'):
        customer_id, _ = parse_selection(data['customer_id'])
        if customer_id is not None:
            payload['customer_id'] = customer_id
    if 'notes' in data:
        payload['notes'] = data['notes'] or None
    if data.get('status'):
        payload['status'] = data['status']

    if not payload:
        return error_response('No valid fields to update')
    return result_response(appointments.update(pk, payload))


@api_view(['POST'])
@permission_classes([for_section('appointment', 'send_reminders')])
def send_reminders(request, dashboard):
    """Ask the upstream API to send reminders for upcoming appointments"""
    result = AppointmentResource(UpstreamClient.from_request(request)).send_reminders()
    if not result['success']:
        return result_response(result)
    return Response({'success': True, 'message': result['message'], 'sent_count': result['data']['sent_count']})


@api_view(['GET'])
@permission_classes([for_section('appointment', 'view')])
def appointment_form_options(request, dashboard):
    """Customer entries and the orders bookable for ``?customer=<selection key>``"""
    client = UpstreamClient.from_request(request)
    options = build_customer_options(client)
    if not options['success']:
        return result_response(options)

    orders = orders_for_selection(merged_orders(client), options['data'], request.query_params.get('customer', ''))
    return Response({
        'success': True,
        'customers': options['data'],
        'orders': orders,
    })
