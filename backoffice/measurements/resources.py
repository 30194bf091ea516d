"""
Individual and corporate (batch) measurement calls of the upstream API
"""
import logging

from backoffice.core.api_client import ok
from backoffice.core.cache_utils import CORPORATE_BATCHES_LOOKUP, cached_lookup, invalidate_lookup

logger = logging.getLogger(__name__)

NO_DATA_MARKERS = ('no measurement', 'not found', 'no data')


def tolerate_no_data(result):
    """
    Treat "nothing stored yet" answers as an empty list.

    The upstream answers 404 (or an error mentioning missing data) when a
    customer has no measurements; screens show an empty table instead.
    """
    if result['success']:
        data = result['data']
        return ok(data if isinstance(data, list) else [], status=result['status'])
    error = str(result.get('error') or '').lower()
    if result['status'] == 404 or any(marker in error for marker in NO_DATA_MARKERS):
        logger.debug(f"No measurements stored: {result.get('error')}")
        return ok([], status=200)
    return result


class IndividualMeasurementResource:
    def __init__(self, client):
        self.client = client

    def list(self):
        return tolerate_no_data(self.client.get('/customer-measurement/customer/all/',
                                                default_error='Failed to fetch measurements'))

    def get(self, customer_id, product_id):
        return self.client.get(f'/customer-measurement/customer/{customer_id}/product/{product_id}',
                               default_error='Measurement not found')

    def create(self, data):
        return self.client.post('/customer-measurement/', data, default_error='Failed to save measurement')

    def update(self, customer_id, product_id, data):
        return self.client.put(f'/customer-measurement/customer/{customer_id}/product/{product_id}/', data,
                               default_error='Failed to save measurement')

    def delete(self, customer_id, product_id):
        return self.client.delete(f'/customer-measurement/customer/{customer_id}/product/{product_id}',
                                  default_error='Failed to delete measurement')


class CorporateMeasurementResource:
    def __init__(self, client):
        self.client = client

    def list(self):
        return tolerate_no_data(self.client.get('/corporate-measurement/corporate/all',
                                                default_error='Failed to fetch measurements'))

    def cached_list(self):
        """Batches shared by the order and appointment pickers"""
        return cached_lookup(CORPORATE_BATCHES_LOOKUP, self.client, self.list)

    def get(self, bulk_id):
        return self.client.get(f'/corporate-measurement/{bulk_id}', default_error='Measurement not found')

    def create(self, data):
        return self._after_write(self.client.post('/corporate-measurement/', data,
                                                  default_error='Failed to save measurement'))

    def update(self, bulk_id, data):
        return self._after_write(self.client.put(f'/corporate-measurement/{bulk_id}/', data,
                                                 default_error='Failed to save measurement'))

    def delete(self, bulk_id):
        return self._after_write(self.client.delete(f'/corporate-measurement/{bulk_id}/',
                                                    default_error='Failed to delete measurement'))

    def _after_write(self, result):
        if result['success']:
            invalidate_lookup(CORPORATE_BATCHES_LOOKUP, self.client)
        return result
