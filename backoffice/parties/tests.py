"""
Test suite for the customers screen
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory
from backoffice.parties.filters import filter_customers


class CustomerScreenTests(SimpleTestCase):
    """Test customer listing, filtering and writes"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='admin').install(self)
        self.upstream.add('GET', '/customer', {'data': [
            TestDataFactory.individual_customer(1, 'Jane Doe'),
            TestDataFactory.corporate_customer(2, 'Acme Ltd'),
            TestDataFactory.individual_customer(3, 'Sam Acme'),
        ]})

    def test_list_defaults_to_all_with_counts(self):
        response = self.client.get('/admin_dashboard/customer/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 3)
        self.assertEqual(response.data['counts'], {'all': 3, 'individual': 2, 'corporate': 1})
        self.assertTrue(response.data['permissions']['can_delete'])

    def test_list_filters_by_type_and_search(self):
        response = self.client.get('/admin_dashboard/customer/?customer_type=individual&search=acme')
        self.assertEqual([c['id'] for c in response.data['data']], [3])

    def test_create_individual_posts_only_its_fields(self):
        self.upstream.add('POST', '/customer/individual', {'id': 9}, status=201)
        response = self.client.post('/admin_dashboard/customer/', {
            'customer_type': 'individual',
            'customer_name': 'New Person',
            'company_name': 'Should not be sent',
            'email': 'new@test.com',
            'phone_number': '0700',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        payload = self.upstream.calls_to('POST', '/customer/individual')[0]['json']
        self.assertEqual(payload['customer_name'], 'New Person')
        self.assertNotIn('company_name', payload)

    def test_create_corporate_requires_contact(self):
        response = self.client.post('/admin_dashboard/customer/', {
            'customer_type': 'corporate',
            'company_name': 'Globex',
            'email': 'globex@test.com',
            'phone_number': '0700',
            'delivery_address': 'Somewhere',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Contact person is required.')

    def test_update_rejects_non_numeric_id(self):
        response = self.client.put('/admin_dashboard/customer/abc/', {
            'customer_type': 'individual',
            'customer_name': 'Jane',
            'email': 'jane@test.com',
            'phone_number': '0700',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid customer ID format')

    def test_delete_missing_customer(self):
        self.upstream.add('GET', '/customer/7', {'detail': 'Customer not found'}, status=404)
        response = self.client.delete('/admin_dashboard/customer/7/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Customer not found on server: Customer not found')
        self.assertEqual(self.upstream.calls_to('DELETE', '/customer/7'), [])

    def test_delete_existing_customer(self):
        self.upstream.add('GET', '/customer/1', TestDataFactory.individual_customer(1))
        self.upstream.add('DELETE', '/customer/1', None, status=204)
        response = self.client.delete('/admin_dashboard/customer/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Customer deleted successfully')

    def test_phone_search_is_substring(self):
        customers = [TestDataFactory.individual_customer(1, phone_number='07123456')]
        self.assertEqual(len(filter_customers(customers, search='2345')), 1)
        self.assertEqual(len(filter_customers(customers, search='999')), 0)
