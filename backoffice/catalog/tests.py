"""
Test suite for the catalog app
Tests: products, customer product filtering, measurement fields and sync, size measurements
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.catalog.filters import filter_products, products_for_customer
from backoffice.catalog.utils import format_size, size_from_label, sync_measurement_fields
from backoffice.core.api_client import fail, ok
from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory


class ProductsForCustomerTests(SimpleTestCase):
    """Test the product list offered when measuring a customer"""

    def setUp(self):
        self.products = [
            TestDataFactory.product(1, 'Waistcoat'),
            TestDataFactory.product(2, 'Blazer', customer_id=7),
            TestDataFactory.product(3, 'Trousers', customer_id='0'),
            TestDataFactory.product(4, 'Coat', customer_id=8),
            TestDataFactory.product(5, 'Apron', customer_id=9),
        ]

    def test_defaults_first_then_customer_products(self):
        measurements = [{'customer_id': 7, 'product_id': 5}]
        result = products_for_customer(self.products, '7', 'individual', measurements)
        self.assertEqual([p['id'] for p in result], [3, 1, 2, 5])

    def test_other_customers_products_are_dropped(self):
        result = products_for_customer(self.products, 7, 'individual', [])
        self.assertNotIn(4, [p['id'] for p in result])
        self.assertNotIn(5, [p['id'] for p in result])

    def test_corporate_uses_corporate_customer_id(self):
        measurements = [{'corporate_customer_id': 8, 'product_id': 5}, {'customer_id': 8, 'product_id': 2}]
        result = products_for_customer(self.products, 8, 'corporate', measurements)
        self.assertEqual([p['id'] for p in result], [3, 1, 4, 5])

    def test_local_search_includes_price(self):
        self.assertEqual([p['id'] for p in filter_products(self.products, '25.0')], [1, 2, 3, 4, 5])
        self.assertEqual([p['id'] for p in filter_products(self.products, 'blaz')], [2])


class SizeTests(SimpleTestCase):
    def test_format_size(self):
        self.assertEqual(format_size('double_extra_small'), 'XXS')
        self.assertEqual(format_size('extra_large'), 'XL')
        self.assertEqual(format_size('custom_fit'), 'Custom Fit')

    def test_size_from_label(self):
        self.assertEqual(size_from_label('xxl'), 'double_large')
        self.assertEqual(size_from_label('medium'), 'medium')
        self.assertIsNone(size_from_label('huge'))


class StubFieldResource:
    """Records sync calls; fails the call named in ``fail_on``"""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []

    def _answer(self, name):
        if name == self.fail_on:
            return fail(f'{name} failed', 400)
        return ok()

    def update(self, field_id, data):
        self.calls.append(('update', field_id, data))
        return self._answer('update')

    def bulk_create(self, product_id, fields):
        self.calls.append(('bulk_create', product_id, fields))
        return self._answer('bulk_create')

    def delete(self, field_id):
        self.calls.append(('delete', field_id))
        return self._answer('delete')


class FieldSyncTests(SimpleTestCase):
    """Test positional synchronisation of measurement fields"""

    def setUp(self):
        self.existing = [
            {'id': 11, 'field_name': 'Chest', 'field_type': 'number', 'unit': 'cm', 'is_required': 'true'},
            {'id': 12, 'field_name': 'Waist', 'field_type': 'number', 'unit': 'cm', 'is_required': 'true'},
            {'id': 13, 'field_name': 'Hip', 'field_type': 'number', 'unit': 'cm', 'is_required': 'false'},
        ]

    def test_updates_only_changed_positions_and_deletes_surplus(self):
        resource = StubFieldResource()
        submitted = [
            {'field_name': 'Chest', 'field_type': 'number', 'unit': 'cm', 'is_required': 'true'},
            {'field_name': ' Waist ', 'field_type': 'number', 'unit': 'in', 'is_required': True},
        ]
        result = sync_measurement_fields(resource, 4, self.existing, submitted)
        self.assertTrue(result['success'])
        self.assertEqual(resource.calls[0], ('update', 12, {
            'field_name': 'Waist', 'field_type': 'number', 'unit': 'in', 'is_required': 'true',
        }))
        self.assertEqual(resource.calls[1], ('delete', 13))
        self.assertEqual(result['data'], {'updated': 1, 'created': 0, 'deleted': 1})

    def test_extra_fields_are_bulk_created(self):
        resource = StubFieldResource()
        submitted = self.existing + [{'field_name': 'Sleeve', 'field_type': 'number', 'unit': 'cm', 'is_required': False}]
        sync_measurement_fields(resource, 4, self.existing, submitted)
        self.assertEqual(resource.calls, [('bulk_create', 4, [
            {'field_name': 'Sleeve', 'field_type': 'number', 'unit': 'cm', 'is_required': 'false'},
        ])])

    def test_stops_at_first_failure(self):
        resource = StubFieldResource(fail_on='update')
        submitted = [dict(field, unit='mm') for field in self.existing[:1]]
        result = sync_measurement_fields(resource, 4, self.existing, submitted)
        self.assertFalse(result['success'])
        self.assertEqual(len(resource.calls), 1)


class CatalogScreenTests(SimpleTestCase):
    """Test the product and measurement field endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='superadmin').install(self)
        self.upstream.add('GET', '/product', {'products': [
            TestDataFactory.product(1, 'Shirt'),
            TestDataFactory.product(2, 'Suit', 120),
        ]})

    def test_product_list_with_search(self):
        response = self.client.get('/super_admin_dashboard/product/?q=suit')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data['data']], [2])

    def test_product_filters_are_forwarded(self):
        self.client.get('/super_admin_dashboard/product/?category_name=Suit&min_price=')
        self.assertEqual(self.upstream.calls_to('GET', '/product')[0]['params'], {'category_name': 'Suit'})

    def test_create_product_normalises_customer_id(self):
        self.upstream.add('POST', '/product', {'id': 3}, status=201)
        response = self.client.post('/super_admin_dashboard/product/', {
            'category_name': 'Kurta', 'base_price': '45.5', 'description': 'Cotton',
            'style_option': 'Slim', 'customer_id': ' ',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        payload = self.upstream.calls_to('POST', '/product')[0]['json']
        self.assertEqual(payload['base_price'], 45.5)
        self.assertIsNone(payload['customer_id'])
        self.assertEqual(payload['comments'], '')

    def test_admin_cannot_create_products(self):
        FakeUpstream(role='admin').install(self)
        response = self.client.post('/admin_dashboard/product/', {'category_name': 'Kurta'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_field_groups_carry_product_names(self):
        self.upstream.add('GET', '/measurement-field/measurements/all', {'success': True, 'data': [
            {'product_id': 1, 'measurement_fields': [{'id': 1, 'field_name': 'Collar', 'field_type': 'number', 'unit': 'cm'}]},
            {'product_id': 2, 'measurement_fields': [{'id': 2, 'field_name': 'Lapel', 'field_type': 'text', 'unit': 'cm'}]},
        ]})
        response = self.client.get('/super_admin_dashboard/measurement-field/?q=collar')
        self.assertEqual(len(response.data['data']), 1)
        self.assertEqual(response.data['data'][0]['product_name'], 'Shirt')

    def test_bulk_create_validates_each_field(self):
        response = self.client.post('/super_admin_dashboard/measurement-field/', {
            'product_id': 1,
            'fields': [{'field_name': 'Collar', 'field_type': 'number', 'unit': ''}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Unit is required for field 1')

    def test_bulk_create_accepts_boolean_required_flag(self):
        self.upstream.add('POST', '/measurement-field/bulk', {'created': 2}, status=201)
        response = self.client.post('/super_admin_dashboard/measurement-field/', {
            'product_id': 1,
            'fields': [
                {'field_name': 'Collar', 'field_type': 'number', 'unit': 'cm', 'is_required': True},
                {'field_name': 'Cuff', 'field_type': 'number', 'unit': 'cm', 'is_required': False},
            ],
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        sent = self.upstream.calls_to('POST', '/measurement-field/bulk')[0]['json']['fields']
        self.assertEqual([f['is_required'] for f in sent], ['true', 'false'])

    def test_field_update_accepts_boolean_required_flag(self):
        self.upstream.add('PUT', '/measurement-field/4', {'id': 4})
        response = self.client.put('/super_admin_dashboard/measurement-field/4/', {
            'field_name': ' Collar ', 'field_type': 'number', 'unit': 'cm', 'is_required': False,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sent = self.upstream.calls_to('PUT', '/measurement-field/4')[0]['json']
        self.assertEqual(sent['is_required'], 'false')
        self.assertEqual(sent['field_name'], 'Collar')

    def test_field_update_rejects_unknown_required_flag(self):
        response = self.client.put('/super_admin_dashboard/measurement-field/4/', {
            'field_name': 'Collar', 'field_type': 'number', 'unit': 'cm', 'is_required': 'maybe',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Required must be true or false.')

    def test_size_measurement_requires_configured_fields(self):
        self.upstream.add('GET', '/measurement-field/product/1', [])
        response = self.client.post('/super_admin_dashboard/product-measurement/', {
            'product_id': 1, 'size': 'M', 'measurements': {},
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('No measurement fields are configured', response.data['error'])

    def test_size_measurement_create(self):
        self.upstream.add('GET', '/measurement-field/product/1', [
            {'id': 5, 'field_name': 'Chest', 'is_required': 'true'},
        ])
        self.upstream.add('POST', '/product-measurement', {'id': 1}, status=201)
        response = self.client.post('/super_admin_dashboard/product-measurement/', {
            'product_id': 1, 'size': 'XL', 'measurements': {'5': '40'},
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.upstream.calls_to('POST', '/product-measurement')[0]['json']['size'], 'extra_large')

    def test_size_measurement_delete_conflict(self):
        self.upstream.add('DELETE', '/product-measurement/product/1/size/medium', {'detail': 'in use'}, status=409)
        response = self.client.delete('/super_admin_dashboard/product-measurement/product/1/size/medium/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(response.data['error'].startswith('Cannot delete the product measurement'))
