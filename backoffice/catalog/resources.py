"""
Product, measurement field and product (size) measurement calls of the upstream API
"""
from backoffice.core.api_client import ok
from backoffice.core.cache_utils import PRODUCTS_LOOKUP, cached_lookup, invalidate_lookup

PRODUCT_FILTERS = ('category_name', 'min_price', 'max_price', 'style_option', 'search', 'customer_id')


def as_list(result):
    """Coerce a successful result's payload to a list"""
    if result['success'] and not isinstance(result['data'], list):
        return ok([], status=result['status'])
    return result


class ProductResource:
    def __init__(self, client):
        self.client = client

    def list(self, filters=None):
        params = {key: (filters or {}).get(key) for key in PRODUCT_FILTERS} if filters else None
        return as_list(self.client.get('/product', params=params,
                                       default_error='Failed to load products',
                                       unwrap_keys=('products',)))

    def cached_list(self):
        return cached_lookup(PRODUCTS_LOOKUP, self.client, self.list)

    def create(self, data):
        result = self.client.post('/product', data, default_error='Failed to create product')
        return self._after_write(result, 'Product created successfully')

    def update(self, product_id, data):
        result = self.client.put(f'/product/{product_id}', data, default_error='Failed to update product')
        return self._after_write(result, 'Product updated successfully')

    def delete(self, product_id):
        result = self.client.delete(f'/product/{product_id}', default_error='Failed to delete product')
        return self._after_write(result, 'Product deleted successfully')

    def _after_write(self, result, message):
        if result['success']:
            invalidate_lookup(PRODUCTS_LOOKUP, self.client)
            result['message'] = message
        return result


class MeasurementFieldResource:
    def __init__(self, client):
        self.client = client

    def grouped(self):
        """All fields grouped as ``[{product_id, measurement_fields}]``"""
        return as_list(self.client.get('/measurement-field/measurements/all',
                                       default_error='Failed to fetch measurement fields'))

    def for_product(self, product_id):
        return as_list(self.client.get(f'/measurement-field/measurements/{product_id}',
                                       default_error='Failed to fetch measurement fields for product'))

    def definitions(self, product_id):
        """Field definitions used to render a product measurement form"""
        return as_list(self.client.get(f'/measurement-field/product/{product_id}',
                                       default_error='Failed to fetch measurement fields'))

    def bulk_create(self, product_id, fields):
        return self.client.post('/measurement-field/bulk', {
            'product_id': int(product_id),
            'fields': fields,
        }, default_error='Failed to create measurement field')

    def update(self, field_id, data):
        result = self.client.put(f'/measurement-field/{field_id}', data,
                                 default_error='Failed to update measurement field')
        if result['success'] and not result.get('message'):
            result['message'] = 'Measurement field updated successfully'
        return result

    def delete(self, field_id):
        return self.client.delete(f'/measurement-field/{field_id}',
                                  default_error='Failed to delete measurement field')

    def delete_for_product(self, fields):
        """Delete every field of a product group, stopping at the first failure"""
        for field in fields:
            result = self.delete(field['id'])
            if not result['success']:
                return result
        return ok({'deleted': len(fields)})


class ProductMeasurementResource:
    def __init__(self, client):
        self.client = client

    def list(self):
        return as_list(self.client.get('/product-measurement',
                                       default_error='Failed to fetch product measurements'))

    def get(self, measurement_id):
        return self.client.get(f'/product-measurement/{measurement_id}',
                               default_error='Failed to fetch product measurement')

    def create(self, data):
        return self.client.post('/product-measurement', data,
                                default_error='Failed to create product measurement')

    def update(self, measurement_id, data):
        return self.client.put(f'/product-measurement/{measurement_id}', data,
                               default_error='Failed to update product measurement')

    def get_by_size(self, product_id, size):
        return self.client.get(f'/product-measurement/product/{product_id}/size/{size}',
                               default_error='Failed to fetch product measurement')

    def delete_by_size(self, product_id, size):
        return self.client.delete(f'/product-measurement/product/{product_id}/size/{size}',
                                  default_error='Failed to delete product measurement')
