"""
Test suite for the cashbook
Tests: paging, summary mapping, references, screen filters, admin-only access
"""
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status

from backoffice.cashbook.resources import MAX_PAGES
from backoffice.cashbook.utils import filter_entries, serialize_references, summary_range
from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream


def entry(entry_id=1, date='2024-05-01', transaction_type='income', amount=100.0, **extra):
    data = {'id': entry_id, 'transaction_type': transaction_type, 'amount': amount,
            'description': f'Entry {entry_id}', 'transaction_date': date,
            'references': None, 'reference_details': None, 'special_notes': None}
    data.update(extra)
    return data


class CashbookHelperTests(SimpleTestCase):
    def test_serialize_references(self):
        text, details = serialize_references([
            {'id': '1', 'type': 'invoice', 'name': 'INV', 'detail': '42'},
            {'id': '2', 'type': 'bank', 'name': 'Ref', 'detail': 'X9'},
        ])
        self.assertEqual(details, 'INV: 42; Ref: X9')
        self.assertTrue(text.startswith('[{"id":"1","type":"invoice"'))
        self.assertEqual(serialize_references([]), (None, None))

    def test_filters_and_order(self):
        entries = [
            entry(1, '2024-05-01'),
            entry(2, '2024-05-03', 'expense', references='[{"name":"Supplier","detail":"Cloth","type":"bill"}]'),
            entry(3, '2024-04-01', references='plain text ref'),
        ]
        self.assertEqual([e['id'] for e in filter_entries(entries)], [2, 1, 3])
        self.assertEqual([e['id'] for e in filter_entries(entries, transaction_type='expense')], [2])
        self.assertEqual([e['id'] for e in filter_entries(entries, tab='today', today='2024-05-01')], [1])
        self.assertEqual([e['id'] for e in filter_entries(entries, tab='all', start_date='2024-05-01',
                                                          end_date='2024-05-31')], [2, 1])
        self.assertEqual([e['id'] for e in filter_entries(entries, query='cloth')], [2])
        self.assertEqual([e['id'] for e in filter_entries(entries, query='PLAIN')], [3])
        self.assertEqual(len(filter_entries(entries, query='100')), 3)

    def test_summary_range(self):
        self.assertEqual(summary_range('today', None, None, '2024-05-01'), ('2024-05-01', '2024-05-01'))
        self.assertEqual(summary_range('all', '2024-01-01', '2024-02-01', '2024-05-01'), ('2024-01-01', '2024-02-01'))
        self.assertEqual(summary_range('all', None, None, '2024-05-01'), ('2023-01-01', '2025-12-31'))
        self.assertEqual(summary_range(None, '2024-01-01', '2024-02-01', '2024-05-01'), ('2024-05-01', '2024-05-01'))
        self.assertEqual(summary_range('', None, None, '2024-05-01'), ('2024-05-01', '2024-05-01'))


class CashbookEndpointTests(SimpleTestCase):
    """Test the cashbook endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='admin').install(self)

    def test_fetch_all_pages(self):
        pages = {
            1: {'entries': [entry(1)], 'pagination': {'has_next': True}},
            2: {'entries': [entry(2, '2024-06-01')], 'pagination': {'has_next': False}},
        }
        self.upstream.add('GET', '/cashbook/search', lambda call: pages[call['params']['page']])

        response = self.client.get('/admin_dashboard/cashbook/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([e['id'] for e in response.data['data']], [2, 1])
        pages_requested = [c['params']['page'] for c in self.upstream.calls_to('GET', '/cashbook/search')]
        self.assertEqual(pages_requested, [1, 2])

    def test_fetch_all_stops_after_page_cap(self):
        self.upstream.add('GET', '/cashbook/search', lambda call: {
            'entries': [entry(call['params']['page'])], 'pagination': {'has_next': True},
        })

        response = self.client.get('/admin_dashboard/cashbook/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(self.upstream.calls_to('GET', '/cashbook/search')), MAX_PAGES)
        self.assertEqual(MAX_PAGES, 100)
        self.assertEqual(len(response.data['data']), 100)

    def test_search_clamps_page_size(self):
        self.upstream.add('GET', '/cashbook/search', {'entries': []})
        response = self.client.get('/admin_dashboard/cashbook/search/?page_size=500&transaction_type=income')
        self.assertEqual(response.data['data']['pagination']['page_size'], 100)
        params = self.upstream.calls_to('GET', '/cashbook/search')[0]['params']
        self.assertEqual(params['page_size'], 100)
        self.assertEqual(params['transaction_type'], 'income')

    def test_summary_maps_net_balance(self):
        self.upstream.add('POST', '/cashbook/summary', {
            'total_income': 500, 'total_expense': 200, 'net_profit_loss': 300, 'running_balance': 1000,
        })
        response = self.client.get('/admin_dashboard/cashbook/summary/?tab=all&start_date=2024-05-01&end_date=2024-05-31')
        self.assertEqual(response.data['data']['net_balance'], 300)
        self.assertEqual(response.data['data']['period_start'], '2024-05-01')
        self.assertEqual(response.data['data']['daily_summaries'], [])

    def test_summary_without_tab_covers_today(self):
        self.upstream.add('POST', '/cashbook/summary', {'net_profit_loss': 0})
        self.client.get('/admin_dashboard/cashbook/summary/?start_date=2024-05-01&end_date=2024-05-31')
        today = timezone.localdate().isoformat()
        sent = self.upstream.calls_to('POST', '/cashbook/summary')[0]['json']
        self.assertEqual(sent, {'start_date': today, 'end_date': today})

    def test_create_income(self):
        self.upstream.add('POST', '/cashbook/income', entry(5), status=201)
        response = self.client.post('/admin_dashboard/cashbook/income/', {
            'amount': '120.50', 'description': 'Suit deposit', 'transaction_date': '2024-05-01',
            'references': [{'id': '1', 'type': 'receipt', 'name': 'R', 'detail': '7'}], 'special_notes': '',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        sent = self.upstream.calls_to('POST', '/cashbook/income')[0]['json']
        self.assertEqual(sent['amount'], 120.5)
        self.assertEqual(sent['reference_details'], 'R: 7')
        self.assertIsNone(sent['special_notes'])

    def test_create_expense_without_references(self):
        self.upstream.add('POST', '/cashbook/expense', entry(6, transaction_type='expense'), status=201)
        self.client.post('/admin_dashboard/cashbook/expense/', {
            'amount': 30, 'description': 'Thread', 'transaction_date': '2024-05-01',
        })
        sent = self.upstream.calls_to('POST', '/cashbook/expense')[0]['json']
        self.assertIsNone(sent['references'])
        self.assertIsNone(sent['reference_details'])

    def test_create_requires_description(self):
        response = self.client.post('/admin_dashboard/cashbook/income/', {'amount': 10, 'transaction_date': '2024-05-01'})
        self.assertEqual(response.data['error'], 'Description is required')

    def test_delete_missing_entry(self):
        response = self.client.delete('/admin_dashboard/cashbook/entries/9/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Entry not found')

    def test_superadmin_has_no_cashbook(self):
        FakeUpstream(role='superadmin').install(self)
        response = self.client.get('/super_admin_dashboard/cashbook/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
