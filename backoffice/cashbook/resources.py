"""
Cashbook calls of the upstream API
"""
import logging

from backoffice.core.api_client import fail, ok

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
MAX_PAGES = 100

SEARCH_FILTERS = (
    'start_date', 'end_date', 'transaction_type', 'min_amount', 'max_amount', 'description_contains',
)

INCOME = 'income'
EXPENSE = 'expense'
TRANSACTION_TYPES = (INCOME, EXPENSE)


def empty_pagination(page_size):
    return {
        'current_page': 1,
        'page_size': page_size,
        'total_entries': 0,
        'total_pages': 0,
        'has_next': False,
        'has_prev': False,
    }


def clamp_page_size(page_size):
    try:
        page_size = int(page_size)
    except (TypeError, ValueError):
        return MAX_PAGE_SIZE
    return max(1, min(page_size, MAX_PAGE_SIZE))


class CashbookResource:
    def __init__(self, client):
        self.client = client

    def search(self, filters=None, page=1, page_size=MAX_PAGE_SIZE):
        """One page of entries; ``page_size`` never exceeds what the API accepts"""
        page_size = clamp_page_size(page_size)
        params = {key: value for key, value in (filters or {}).items() if key in SEARCH_FILTERS}
        params.update({'page': page, 'page_size': page_size})
        result = self.client.get('/cashbook/search', params=params, default_error='Failed to search entries')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return ok({
            'entries': body.get('entries') or [],
            'pagination': body.get('pagination') or empty_pagination(page_size),
        }, status=result['status'])

    def fetch_all(self):
        """Every entry, page by page, stopping after ``MAX_PAGES`` pages"""
        entries = []
        page = 1
        while page <= MAX_PAGES:
            result = self.search(page=page)
            if not result['success']:
                return result
            entries.extend(result['data']['entries'])
            if not result['data']['pagination'].get('has_next'):
                break
            page += 1
        else:
            logger.warning(f"Stopped fetching cashbook entries after {MAX_PAGES} pages")
        return ok(entries)

    def summary(self, start_date, end_date):
        result = self.client.post('/cashbook/summary', {'start_date': start_date, 'end_date': end_date},
                                  default_error='Failed to fetch summary')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return ok({
            'total_income': body.get('total_income') or 0,
            'total_expense': body.get('total_expense') or 0,
            'net_balance': body.get('net_profit_loss') or 0,
            'running_balance': body.get('running_balance') or 0,
            'period_start': start_date,
            'period_end': end_date,
            'daily_summaries': body.get('daily_summaries') or [],
        }, status=result['status'])

    def create(self, transaction_type, data):
        result = self.client.post(f'/cashbook/{transaction_type}', data,
                                  default_error=f'Failed to create {transaction_type} entry')
        if result['success']:
            result['message'] = f'{transaction_type.title()} entry created successfully'
        return result

    def get(self, entry_id):
        return self._not_found(self.client.get(f'/cashbook/entries/{entry_id}', default_error='Failed to fetch entry'))

    def update(self, entry_id, data):
        result = self.client.put(f'/cashbook/entries/{entry_id}', data, default_error='Failed to update entry')
        if result['success']:
            result['message'] = 'Entry updated successfully'
        return self._not_found(result)

    def delete(self, entry_id):
        result = self.client.delete(f'/cashbook/entries/{entry_id}', default_error='Failed to delete entry')
        if result['success']:
            result['message'] = 'Entry deleted successfully'
        return self._not_found(result)

    @staticmethod
    def _not_found(result):
        if not result['success'] and result['status'] == 404:
            return fail('Entry not found', 404)
        return result
