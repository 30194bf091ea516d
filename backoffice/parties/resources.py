"""
Customer calls of the upstream API
"""
from backoffice.core.api_client import fail, ok
from backoffice.core.cache_utils import CUSTOMERS_LOOKUP, cached_lookup, invalidate_lookup

INDIVIDUAL = 'individual'
CORPORATE = 'corporate'
CUSTOMER_TYPES = (INDIVIDUAL, CORPORATE)

COMMON_FIELDS = ('customer_type', 'email', 'phone_number', 'special_notes', 'delivery_address')
TYPE_FIELDS = {
    INDIVIDUAL: ('customer_name',),
    CORPORATE: ('company_name', 'contact_person'),
}


def parse_customer_id(customer_id):
    """Integer customer id, or None when it does not parse"""
    try:
        return int(str(customer_id).strip())
    except (TypeError, ValueError):
        return None


def customer_payload(data):
    """Only the fields the customer's type accepts"""
    customer_type = data.get('customer_type')
    fields = COMMON_FIELDS + TYPE_FIELDS.get(customer_type, ())
    return {field: data.get(field) for field in fields}


class CustomerResource:
    def __init__(self, client):
        self.client = client

    def list(self, customer_type=None):
        params = {'customer_type': customer_type} if customer_type in CUSTOMER_TYPES else None
        result = self.client.get('/customer', params=params, default_error='Failed to load customers')
        if result['success'] and not isinstance(result['data'], list):
            return ok([], status=result['status'])
        return result

    def cached_list(self):
        """All customers, shared between screens for a short while"""
        return cached_lookup(CUSTOMERS_LOOKUP, self.client, self.list)

    def get(self, customer_id):
        return self.client.get(f'/customer/{customer_id}', default_error='Customer not found')

    def create(self, data):
        endpoint = 'customer/individual' if data.get('customer_type') == INDIVIDUAL else 'customer/corporate'
        result = self.client.post(endpoint, customer_payload(data), default_error='Failed to create customer')
        return self._after_write(result, 'Customer created successfully')

    def update(self, customer_id, data):
        customer_id_int = parse_customer_id(customer_id)
        if customer_id_int is None:
            return fail('Invalid customer ID format', 400)
        result = self.client.put(f'/customer/{customer_id_int}', customer_payload(data),
                                 default_error='Failed to update customer')
        return self._after_write(result, 'Customer updated successfully')

    def delete(self, customer_id):
        customer_id_int = parse_customer_id(customer_id)
        if customer_id_int is None:
            return fail('Invalid customer ID format', 400)

        existing = self.client.call('GET', f'/customer/{customer_id_int}', default_error='Customer not found')
        if not existing['success']:
            return fail(f"Customer not found on server: {existing['error']}", 404)

        result = self.client.delete(f'/customer/{customer_id_int}', default_error='Failed to delete customer')
        return self._after_write(result, 'Customer deleted successfully')

    def _after_write(self, result, message):
        if result['success']:
            invalidate_lookup(CUSTOMERS_LOOKUP, self.client)
            result['message'] = message
        return result
