"""
Test suite for appointments
Tests: customer picker entries, order narrowing, scheduling, updates, reminders
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.appointments.utils import customer_options, filter_appointments, orders_for_selection
from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory


def merged(order_id, customer_id, order_type, bulk_id=None):
    prefix = {'single': 'S', 'bulk-custom': 'BC', 'bulk-default': 'BD'}[order_type]
    return {'id': f'{prefix}-{order_id}', 'order_number': f'X-{order_id}', 'customer_id': customer_id,
            'bulk_id': bulk_id, 'order_type': order_type, 'status': 'cutting', 'original_id': order_id}


def appointment(appointment_id=1, date='2024-05-01', **extra):
    data = {'id': appointment_id, 'customer_id': 1, 'order_id': 15, 'appointment_type': 'fitting',
            'appointment_date': date, 'appointment_time': '10:00', 'status': 'scheduled',
            'customer_name': 'Jane Doe', 'order_number': 'Individual-15'}
    data.update(extra)
    return data


class CustomerOptionTests(SimpleTestCase):
    def setUp(self):
        self.options = customer_options(
            [TestDataFactory.individual_customer(1, name=''), TestDataFactory.corporate_customer(2)],
            [TestDataFactory.corporate_measurement(10, customer_id=2, batch_name='Summer')],
            [{'CustomerID': 2}, {'CustomerID': 9}],
        )

    def test_entries(self):
        self.assertEqual([o['key'] for o in self.options], ['1|none', '2|none', '9|none', '2|10'])
        self.assertEqual([o['label'] for o in self.options][:3],
                         ['1-Customer 1', '2-Acme Ltd', '9-Default Customer 9'])
        self.assertEqual(self.options[2]['customer_type'], 'default')
        self.assertEqual(self.options[3]['batch_measurement_id'], 10)

    def test_order_narrowing(self):
        orders = [
            merged(1, 2, 'single'),
            merged(2, 2, 'bulk-custom', bulk_id='10'),
            merged(3, 2, 'bulk-custom', bulk_id='11'),
            merged(4, 2, 'bulk-default'),
            merged(5, 9, 'bulk-default'),
            merged(6, 9, 'bulk-custom', bulk_id='12'),
        ]
        ids = lambda selection: [o['original_id'] for o in orders_for_selection(orders, self.options, selection)]
        self.assertEqual(ids(''), [1, 2, 3, 4, 5, 6])
        self.assertEqual(ids('2|none'), [1, 2, 3, 4])
        self.assertEqual(ids('2|10'), [1, 2, 4])
        self.assertEqual(ids('9|none'), [5])
        self.assertEqual(ids('2|77'), [])

    def test_screen_filters(self):
        rows = [appointment(1, '2024-05-01'), appointment(2, '2024-05-02', appointment_type='pickup')]
        self.assertEqual(len(filter_appointments(rows, tab='today', today='2024-05-01')), 1)
        self.assertEqual(filter_appointments(rows, tab='view', date='2024-05-02')[0]['id'], 2)
        self.assertEqual(filter_appointments(rows, appointment_type='pickup')[0]['id'], 2)
        self.assertEqual(len(filter_appointments(rows, query='individual-15')), 2)


class AppointmentEndpointTests(SimpleTestCase):
    """Test the appointment endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='admin').install(self)
        self.upstream.add('GET', '/orders/single', [
            {'id': 1, 'order_id': 15, 'customerid': 1, 'productid': 1, 'status': 'cutting'},
        ])

    def test_list_forwards_default_filters(self):
        self.upstream.add('GET', '/appointment/', [appointment(1), appointment(2, appointment_type='pickup')])
        response = self.client.get('/admin_dashboard/appointment/?type=pickup')
        self.assertEqual([a['id'] for a in response.data['data']], [2])
        params = self.upstream.calls_to('GET', '/appointment/')[0]['params']
        self.assertEqual(params['limit'], 100)
        self.assertEqual(params['sort_by'], 'appointment_date')

    def test_create_requires_fields(self):
        response = self.client.post('/admin_dashboard/appointment/', {'customer_id': '1|none'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Please fill all required fields')

    def test_create_resolves_order(self):
        self.upstream.add('POST', '/appointment/', appointment(3), status=201)
        response = self.client.post('/admin_dashboard/appointment/', {
            'customer_id': '1|none', 'order_id': 'S-15', 'appointment_type': 'fitting',
            'appointment_date': '2024-05-01', 'appointment_time': '10:30', 'notes': '',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        sent = self.upstream.calls_to('POST', '/appointment/')[0]['json']
        self.assertEqual(sent, {
            'customer_id': 1, 'order_id': 15, 'appointment_type': 'fitting', 'appointment_date': '2024-05-01',
            'appointment_time': '10:30', 'status': 'scheduled', 'notes': None,
        })

    def test_create_unknown_order(self):
        response = self.client.post('/admin_dashboard/appointment/', {
            'customer_id': '1|none', 'order_id': 'BD-99', 'appointment_type': 'pickup',
            'appointment_date': '2024-05-01', 'appointment_time': '10:30',
        })
        self.assertEqual(response.data['error'], 'Invalid order selection - order ID not found')

    def test_admin_cannot_send_reminders(self):
        response = self.client.post('/admin_dashboard/appointment/send-reminders/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_superadmin_sends_reminders(self):
        FakeUpstream(role='superadmin').install(self).add(
            'POST', '/appointment/send-reminders', {'message': '3 reminders sent', 'sent_count': 3},
        )
        response = self.client.post('/super_admin_dashboard/appointment/send-reminders/')
        self.assertEqual(response.data['sent_count'], 3)
        self.assertEqual(response.data['message'], '3 reminders sent')

    def test_superadmin_update_sends_only_given_fields(self):
        FakeUpstream(role='superadmin').install(self).add('PUT', '/appointment/4', appointment(4))
        response = self.client.put('/super_admin_dashboard/appointment/4/', {'status': 'confirmed', 'notes': ''})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_superadmin_empty_update(self):
        FakeUpstream(role='superadmin').install(self)
        response = self.client.put('/super_admin_dashboard/appointment/4/', {'status': ''})
        self.assertEqual(response.data['error'], 'No valid fields to update')

    def test_form_options(self):
        self.upstream.add('GET', '/customer', [TestDataFactory.individual_customer(1)])
        response = self.client.get('/admin_dashboard/appointment/options/?customer=1|none')
        self.assertEqual(response.data['customers'][0]['key'], '1|none')
        self.assertEqual([o['id'] for o in response.data['orders']], ['S-15'])
