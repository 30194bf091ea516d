"""
Test suite for orders
Tests: merged order list, bulk custom enrichment, validation, role permissions
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory
from backoffice.orders.utils import (
    bulk_id_options, customer_display_name, enrich_bulk_custom, merge_orders, product_display_name,
)


def single_order(child_id=1, order_id=100, customer_id=1, **extra):
    data = {'id': child_id, 'order_id': order_id, 'customerid': customer_id, 'productid': 1,
            'quantity': 1, 'unitprice': 25.0, 'status': 'order_confirmed'}
    data.update(extra)
    return data


def bulk_custom_order(child_id=1, order_id=200, bulk_id=10, **extra):
    data = {'id': child_id, 'order_id': order_id, 'Bulkid': bulk_id, 'unit_price': 20.0,
            'quantity': 5, 'status': 'cutting'}
    data.update(extra)
    return data


def bulk_default_order(child_id=1, order_id=300, customer_id=3, **extra):
    data = {'id': child_id, 'order_id': order_id, 'CustomerID': customer_id, 'ProductID': 1,
            'quantity_by_size': {'M': 4}, 'unitprice': 15.0, 'status': 'stitching'}
    data.update(extra)
    return data


class OrderMergeTests(SimpleTestCase):
    def test_merge_builds_prefixed_ids(self):
        merged = merge_orders({
            'single': [single_order(order_id=15)],
            'bulk-custom': [bulk_custom_order(order_id=23, bulk_id=10)],
            'bulk-default': [bulk_default_order(order_id=31, customer_id=3)],
        }, [TestDataFactory.corporate_measurement(10, customer_id=2)])

        self.assertEqual([o['id'] for o in merged], ['S-15', 'BC-23', 'BD-31'])
        self.assertEqual([o['order_number'] for o in merged], ['Individual-15', 'Corporate-23', 'Default-31'])
        self.assertEqual(merged[1]['customer_id'], 2)
        self.assertEqual(merged[1]['bulk_id'], '10')
        self.assertIsNone(merged[0]['bulk_id'])
        self.assertEqual(merged[2]['original_id'], 31)

    def test_merge_drops_unresolvable_orders(self):
        merged = merge_orders({
            'single': [single_order(customer_id=0), single_order(order_id=None), single_order(child_id=None)],
            'bulk-custom': [bulk_custom_order(bulk_id=99)],
        }, [TestDataFactory.corporate_measurement(10)])
        self.assertEqual(merged, [])

    def test_enrich_bulk_custom(self):
        orders = [bulk_custom_order(bulk_id=10), bulk_custom_order(child_id=2, bulk_id=99, batch_name='Own')]
        enriched = enrich_bulk_custom(orders, [TestDataFactory.corporate_measurement(10, batch_name='Summer')])
        self.assertEqual(enriched[0]['batch_name'], 'Summer')
        self.assertEqual(enriched[0]['customer_name'], 'Acme Ltd')
        self.assertEqual(enriched[1]['batch_name'], 'Own')
        self.assertIsNone(enriched[1]['customer_id'])

    def test_bulk_id_options(self):
        options = bulk_id_options([TestDataFactory.corporate_measurement(10, employees=[{'employee_code': 'E1'}])])
        self.assertEqual(set(options[0]), {
            'id', 'batch_name', 'corporate_customer_id', 'corporate_customer_name',
            'product_id', 'product_name', 'created_at',
        })

    def test_display_names(self):
        self.assertEqual(customer_display_name(TestDataFactory.corporate_customer(2, company=None)),
                         'Corporate Customer 2')
        self.assertEqual(customer_display_name(TestDataFactory.individual_customer(1, name='')), 'Customer 1')
        self.assertEqual(product_display_name(TestDataFactory.product(1, 'Shirt', 25.0)), 'Shirt - 25.0')


class OrderEndpointTests(SimpleTestCase):
    """Test the order endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='admin').install(self)

    def test_merged_list_skips_failing_source(self):
        self.upstream.add('GET', '/orders/single', {'orders': [single_order(order_id=15)]})
        self.upstream.add('GET', '/orders/bulk-custom', {'detail': 'boom'}, status=500)
        self.upstream.add('GET', '/orders/bulk-default', [bulk_default_order(order_id=31)])
        self.upstream.add('GET', '/corporate-measurement/corporate/all', [])

        response = self.client.get('/admin_dashboard/order/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o['id'] for o in response.data['data']], ['S-15', 'BD-31'])
        self.assertEqual(response.data['counts']['bulk-custom'], 0)

    def test_bulk_custom_list_is_enriched(self):
        self.upstream.add('GET', '/orders/bulk-custom', [bulk_custom_order(bulk_id=10)])
        self.upstream.add('GET', '/corporate-measurement/corporate/all', [
            TestDataFactory.corporate_measurement(10, batch_name='Summer'),
        ])
        response = self.client.get('/admin_dashboard/order/bulk-custom/')
        self.assertEqual(response.data['data'][0]['batch_name'], 'Summer')
        self.assertEqual(response.data['data'][0]['customer_id'], 2)

    def test_single_order_create(self):
        self.upstream.add('POST', '/orders/single', single_order(order_id=15), status=201)
        response = self.client.post('/admin_dashboard/order/single/', {
            'customerid': 1, 'productid': 1, 'quantity': 2, 'unitprice': '25.50',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        sent = self.upstream.calls_to('POST', '/orders/single')[0]['json']
        self.assertEqual(sent['status'], 'order_confirmed')
        self.assertEqual(sent['unitprice'], 25.5)

    def test_single_order_requires_customer(self):
        response = self.client.post('/admin_dashboard/order/single/', {'productid': 1, 'unitprice': 10})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Customer is required')

    def test_bulk_default_needs_a_quantity(self):
        response = self.client.post('/admin_dashboard/order/bulk-default/', {
            'CustomerID': 3, 'ProductID': 1, 'unitprice': 10, 'quantity_by_size': {'M': 0},
        })
        self.assertEqual(response.data['error'], 'Enter a quantity for at least one size')

    def test_admin_cannot_edit_orders(self):
        response = self.client.put('/admin_dashboard/order/single/1/', {'status': 'cutting'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_superadmin_partial_update(self):
        FakeUpstream(role='superadmin').install(self).add('PUT', '/orders/single/1', single_order(status='cutting'))
        response = self.client.put('/super_admin_dashboard/order/single/1/', {'status': 'cutting'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Order updated successfully')

    def test_superadmin_empty_update(self):
        FakeUpstream(role='superadmin').install(self)
        response = self.client.put('/super_admin_dashboard/order/single/1/', {})
        self.assertEqual(response.data['error'], 'No valid fields to update')

    def test_by_bulk_id(self):
        self.upstream.add('GET', '/orders/bulk-custom/by-bulkid/10', bulk_custom_order(bulk_id=10))
        response = self.client.get('/admin_dashboard/order/bulk-custom/by-bulkid/10/')
        self.assertEqual(response.data['data']['Bulkid'], 10)
