from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from backoffice.core.api_client import UpstreamClient
from backoffice.core.responses import error_response, result_response, validation_error_response
from backoffice.dashboards.permissions import for_section, section_flags

from .resources import MAX_PAGE_SIZE, SEARCH_FILTERS, CashbookResource
from .serializers import CashbookEntrySerializer
from .utils import filter_entries, summary_range


def _today():
    return timezone.localdate().isoformat()


@api_view(['GET'])
@permission_classes([for_section('cashbook')])
def cashbook_entry_list(request, dashboard):
    """Every entry with the screen's type, tab, range and search filters applied"""
    result = CashbookResource(UpstreamClient.from_request(request)).fetch_all()
    if not result['success']:
        return result_response(result)

    params = request.query_params
    entries = filter_entries(
        result['data'],
        transaction_type=params.get('type'),
        tab=params.get('tab'),
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
        query=params.get('q', ''),
        today=_today(),
    )
    return Response({
        'success': True,
        'data': entries,
        'count': len(entries),
        'permissions': section_flags(dashboard, 'cashbook'),
    })


@api_view(['GET'])
@permission_classes([for_section('cashbook', 'view')])
def cashbook_search(request, dashboard):
    """One page of the upstream search, filters passed through"""
    params = request.query_params
    try:
        page = max(1, int(params.get('page', 1)))
    except ValueError:
        return error_response('Page must be a number')
    filters = {key: params.get(key) for key in SEARCH_FILTERS}
    result = CashbookResource(UpstreamClient.from_request(request)).search(
        filters, page=page, page_size=params.get('page_size', MAX_PAGE_SIZE),
    )
    return result_response(result)


@api_view(['GET'])
@permission_classes([for_section('cashbook', 'view_summary')])
def cashbook_summary(request, dashboard):
    """Income, expense and balance totals for today, a range, or the wide default period"""
    params = request.query_params
    start_date, end_date = summary_range(params.get('tab'), params.get('start_date'), params.get('end_date'), _today())
    return result_response(CashbookResource(UpstreamClient.from_request(request)).summary(start_date, end_date))


@api_view(['POST'])
@permission_classes([for_section('cashbook')])
def cashbook_entry_create(request, dashboard, transaction_type):
    """Record an income or expense entry"""
    serializer = CashbookEntrySerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)
    result = CashbookResource(UpstreamClient.from_request(request)).create(transaction_type, serializer.to_payload())
    return result_response(result, status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('cashbook')])
def cashbook_entry_detail(request, dashboard, pk):
    """Retrieve, update (submitted fields only) or delete an entry"""
    entries = CashbookResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        return result_response(entries.get(pk))
    elif request.method in ('PUT', 'PATCH'):
        serializer = CashbookEntrySerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        payload = serializer.to_payload()
        if not payload:
            return error_response('No valid fields to update')
        return result_response(entries.update(pk, payload))
    else:  # DELETE
        return result_response(entries.delete(pk))
