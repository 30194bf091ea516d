"""
Appointment calls of the upstream API
"""
from backoffice.core.api_client import ok

APPOINTMENT_FILTERS = (
    'customer_id', 'order_id', 'appointment_type', 'status', 'date_from', 'date_to', 'search',
    'skip', 'limit', 'sort_by', 'sort_order',
)

DEFAULT_FILTERS = {
    'skip': 0,
    'limit': 100,
    'sort_by': 'appointment_date',
    'sort_order': 'asc',
}


class AppointmentResource:
    def __init__(self, client):
        self.client = client

    def list(self, filters=None):
        params = dict(DEFAULT_FILTERS)
        params.update({key: value for key, value in (filters or {}).items()
                       if key in APPOINTMENT_FILTERS and value not in (None, '')})
        result = self.client.get('/appointment/', params=params, default_error='Failed to fetch appointments')
        if result['success'] and not isinstance(result['data'], list):
            return ok([], status=result['status'])
        return result

    def create(self, data):
        result = self.client.post('/appointment/', data, default_error='Failed to create appointment')
        if result['success']:
            result['message'] = 'Appointment scheduled successfully!'
        return result

    def update(self, appointment_id, data):
        result = self.client.put(f'/appointment/{appointment_id}', data, default_error='Failed to update appointment')
        if result['success']:
            result['message'] = 'Appointment updated successfully!'
        return result

    def delete(self, appointment_id):
        result = self.client.delete(f'/appointment/{appointment_id}', default_error='Failed to delete appointment')
        if result['success']:
            result['message'] = 'Appointment deleted successfully!'
        return result

    def send_reminders(self):
        result = self.client.post('/appointment/send-reminders', default_error='Failed to send reminders')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return ok(
            {'sent_count': body.get('sent_count') or 0},
            message=body.get('message') or 'Reminders sent successfully',
            status=result['status'],
        )
