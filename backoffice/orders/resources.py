"""
Order calls of the upstream API

Single, bulk custom and bulk default orders live in separate upstream
collections with the same shape of endpoints.
"""
import logging

from backoffice.core.api_client import ok
from backoffice.measurements.resources import CorporateMeasurementResource

from .constants import BULK_CUSTOM, BULK_DEFAULT, ORDER_KINDS, SINGLE
from .utils import merge_orders

logger = logging.getLogger(__name__)


class OrderResource:
    kind = None
    path = None

    def __init__(self, client):
        self.client = client

    def list(self):
        result = self.client.get(self.path, default_error='Failed to fetch orders', unwrap_keys=('orders',))
        if result['success'] and not isinstance(result['data'], list):
            return ok([], status=result['status'])
        return result

    def get(self, order_id):
        return self.client.get(f'{self.path}/{order_id}', default_error='Order not found')

    def create(self, data):
        result = self.client.post(self.path, data, default_error='Failed to create order')
        if result['success']:
            result['message'] = 'Order created successfully'
        return result

    def update(self, order_id, data):
        result = self.client.put(f'{self.path}/{order_id}', data, default_error='Failed to update order')
        if result['success']:
            result['message'] = 'Order updated successfully'
        return result

    def delete(self, order_id):
        result = self.client.delete(f'{self.path}/{order_id}', default_error='Failed to delete order')
        if result['success']:
            result['message'] = 'Order deleted successfully'
        return result


class SingleOrderResource(OrderResource):
    kind = SINGLE
    path = '/orders/single'


class BulkCustomOrderResource(OrderResource):
    kind = BULK_CUSTOM
    path = '/orders/bulk-custom'

    def by_bulk_id(self, bulk_id):
        return self.client.get(f'{self.path}/by-bulkid/{bulk_id}', default_error='Order not found')


class BulkDefaultOrderResource(OrderResource):
    kind = BULK_DEFAULT
    path = '/orders/bulk-default'


ORDER_RESOURCES = {
    SINGLE: SingleOrderResource,
    BULK_CUSTOM: BulkCustomOrderResource,
    BULK_DEFAULT: BulkDefaultOrderResource,
}


def merged_orders(client):
    """
    All three order collections flattened into one list for pickers.

    A collection that fails to load is skipped; the others still show.
    """
    batches = CorporateMeasurementResource(client).cached_list()
    if not batches['success']:
        logger.warning(f"Corporate batches unavailable, bulk custom orders lose their customer: {batches['error']}")

    sources = {}
    for kind in ORDER_KINDS:
        result = ORDER_RESOURCES[kind](client).list()
        if not result['success']:
            logger.warning(f"Skipping {kind} orders: {result['error']}")
            continue
        sources[kind] = result['data']

    return merge_orders(sources, batches['data'] if batches['success'] else [])
