"""
Test suite for customer measurements
Tests: no-data tolerance, validation, flattening, friendly delete errors, customer products
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.core.api_client import fail
from backoffice.core.responses import describe_delete_failure
from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory
from backoffice.measurements.resources import tolerate_no_data
from backoffice.measurements.utils import corporate_for_edit, flatten_measurements


class MeasurementHelperTests(SimpleTestCase):
    def test_not_found_is_empty_list(self):
        self.assertEqual(tolerate_no_data(fail('Whatever', 404))['data'], [])
        self.assertEqual(tolerate_no_data(fail('No measurements for customer', 400))['data'], [])

    def test_real_errors_are_kept(self):
        result = tolerate_no_data(fail('Database unavailable', 500))
        self.assertFalse(result['success'])

    def test_flatten_value_objects(self):
        self.assertEqual(flatten_measurements({'3': {'value': '40'}, 4: '32'}), {'3': '40', '4': '32'})
        self.assertEqual(flatten_measurements([{'field_id': 3, 'value': '40'}]), {'3': '40'})

    def test_corporate_for_edit(self):
        batch = TestDataFactory.corporate_measurement(employees=[
            {'employee_code': 'E1', 'employee_name': 'Ann', 'measurements': {'7': {'value': 15}}},
        ])
        self.assertEqual(corporate_for_edit(batch)['employees'][0]['measurements'], {'7': 15})

    def test_delete_failure_messages(self):
        subject = 'the individual measurement for customer 1 and product 2'
        self.assertIn('existing orders', describe_delete_failure(fail('x', 409), subject)['error'])
        self.assertIn('was not found', describe_delete_failure(fail('x', 404), subject)['error'])
        self.assertIn("don't have permission", describe_delete_failure(fail('x', 403), subject)['error'])
        self.assertIn('server error', describe_delete_failure(fail('x', 503), subject)['error'])
        self.assertIn('appointments', describe_delete_failure(fail('violates foreign key', 422), subject)['error'])
        self.assertEqual(describe_delete_failure(fail('Locked', 422), subject)['error'], 'Locked')


class MeasurementScreenTests(SimpleTestCase):
    """Test the measurement endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='admin').install(self)

    def test_individual_list_without_data(self):
        self.upstream.add('GET', '/customer-measurement/customer/all', {'detail': 'No measurements found'}, status=404)
        response = self.client.get('/admin_dashboard/measurement/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], [])
        self.assertFalse(response.data['permissions']['can_delete'])

    def test_corporate_list_search(self):
        self.upstream.add('GET', '/corporate-measurement/corporate/all', [
            TestDataFactory.corporate_measurement(10, batch_name='Summer Uniforms'),
            TestDataFactory.corporate_measurement(11, batch_name='Winter'),
        ])
        response = self.client.get('/admin_dashboard/measurement/?type=corporate&q=summer')
        self.assertEqual([m['id'] for m in response.data['data']], [10])

    def test_corporate_create_validates_employees(self):
        response = self.client.post('/admin_dashboard/measurement/corporate/', {
            'corporate_customer_id': 2, 'product_id': 1, 'batch_name': 'Batch',
            'employees': [{'employee_code': 'E1', 'employee_name': 'Ann'}, {'employee_code': 'E2', 'employee_name': ' '}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Employee 2: Employee Name is required')

    def test_corporate_create_treats_null_employee_values_as_missing(self):
        response = self.client.post('/admin_dashboard/measurement/corporate/', {
            'corporate_customer_id': 2, 'product_id': 1, 'batch_name': 'Batch',
            'employees': [{'employee_code': None, 'employee_name': 'Ann'}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Employee 1: Employee Code is required')

        response = self.client.post('/admin_dashboard/measurement/corporate/', {
            'corporate_customer_id': 2, 'product_id': 1, 'batch_name': 'Batch',
            'employees': [{'employee_code': 'E1', 'employee_name': 'Ann'}, {'employee_code': 'E2', 'employee_name': None}],
        })
        self.assertEqual(response.data['error'], 'Employee 2: Employee Name is required')

    def test_corporate_create_counts_employees(self):
        self.upstream.add('POST', '/corporate-measurement/', {'id': 12}, status=201)
        response = self.client.post('/admin_dashboard/measurement/corporate/', {
            'corporate_customer_id': 2, 'product_id': 1, 'batch_name': 'Batch',
            'employees': [
                {'employee_code': 'E1', 'employee_name': 'Ann', 'measurements': {'1': '40'}},
                {'employee_code': 'E2', 'employee_name': 'Bob'},
            ],
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.upstream.calls_to('POST', '/corporate-measurement/')[0]['json']['no_of_employees'], 2)

    def test_individual_requires_customer(self):
        response = self.client.post('/admin_dashboard/measurement/individual/', {'product_id': 1})
        self.assertEqual(response.data['error'], 'Customer ID is required')

    def test_admin_cannot_delete_measurements(self):
        response = self.client.delete('/admin_dashboard/measurement/individual/1/2/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_superadmin_delete_conflict(self):
        FakeUpstream(role='superadmin').install(self).add(
            'DELETE', '/customer-measurement/customer/1/product/2', {'detail': 'in use'}, status=400,
        )
        response = self.client.delete('/super_admin_dashboard/measurement/individual/1/2/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('because there are existing orders', response.data['error'])

    def test_products_for_customer_endpoint(self):
        self.upstream.add('GET', '/product', [
            TestDataFactory.product(1, 'Shirt'),
            TestDataFactory.product(2, 'Suit', customer_id=5),
            TestDataFactory.product(3, 'Coat', customer_id=6),
        ])
        self.upstream.add('GET', '/customer-measurement/customer/all', [])
        response = self.client.get('/admin_dashboard/measurement/products/?customer_id=5&type=individual')
        self.assertEqual([p['id'] for p in response.data['data']], [1, 2])

    def test_products_for_customer_survives_measurement_failure(self):
        self.upstream.add('GET', '/product', [TestDataFactory.product(1, 'Shirt')])
        self.upstream.add('GET', '/customer-measurement/customer/all', {'detail': 'boom'}, status=500)
        response = self.client.get('/admin_dashboard/measurement/products/?customer_id=5')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 1)

    def test_form_fields_read_product_definitions(self):
        self.upstream.add('GET', '/measurement-field/product/1', [
            {'id': 5, 'field_name': 'Chest', 'field_type': 'number', 'unit': 'cm', 'is_required': 'true'},
        ])
        response = self.client.get('/admin_dashboard/measurement/fields/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([f['field_name'] for f in response.data['data']], ['Chest'])
        self.assertEqual(len(self.upstream.calls_to('GET', '/measurement-field/product/1')), 1)
        self.assertEqual(self.upstream.calls_to('GET', '/measurement-field/measurements/1'), [])

    def test_form_fields_failure_is_reported(self):
        self.upstream.add('GET', '/measurement-field/product/1', {'detail': 'Server error'}, status=500)
        response = self.client.get('/admin_dashboard/measurement/fields/1/')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error'], 'Server error')
