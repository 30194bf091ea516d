from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import result_response, validation_error_response
from backoffice.dashboards.permissions import for_section, section_flags

from .filters import count_customers_by_type, filter_customers
from .resources import CustomerResource
from .serializers import CustomerSerializer


# Customer views
@api_view(['GET', 'POST'])
@permission_classes([for_section('customer')])
def customer_list_create(request, dashboard):
    """List customers filtered by type and search, or create a new customer"""
    customers = CustomerResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        customer_type = request.query_params.get('customer_type', 'all')
        search = request.query_params.get('search', '')

        result = customers.list()
        if not result['success']:
            return result_response(result)
        all_customers = result['data']
        return Response({
            'success': True,
            'data': filter_customers(all_customers, customer_type, search),
            'counts': count_customers_by_type(all_customers),
            'customer_type': customer_type,
            'permissions': section_flags(dashboard, 'customer'),
        })
    else:
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        result = customers.create(serializer.validated_data)
        return result_response(result, status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('customer')])
def customer_detail(request, dashboard, pk):
    """Retrieve, update or delete a customer"""
    customers = CustomerResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        return result_response(customers.get(pk))
    elif request.method in ('PUT', 'PATCH'):
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        return result_response(customers.update(pk, serializer.validated_data))
    else:  # DELETE
        return result_response(customers.delete(pk))
