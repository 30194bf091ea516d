"""
Appointment form pickers and screen filters

Customer options are keyed ``"{customer_id}|{batch_id}"`` (``none`` when the
entry is not tied to a corporate batch); the order picker is narrowed to the
orders that make sense for the selected entry.
"""
from backoffice.orders.constants import BULK_CUSTOM, BULK_DEFAULT, SINGLE
from backoffice.orders.utils import positive_int

NO_BATCH = 'none'
DEFAULT = 'default'

TODAY_TAB = 'today'
VIEW_TAB = 'view'


def option_label(customer_id, customer):
    if customer.get('customer_type') == 'corporate':
        return f"{customer_id}-{customer.get('company_name') or 'Unknown Company'}"
    return f"{customer_id}-{customer.get('customer_name') or f'Customer {customer_id}'}"


def customer_options(customers, batches=(), default_orders=()):
    """
    Entries for the appointment customer picker.

    One entry per customer, a ``default`` entry for every bulk default order
    customer missing from the customer list, and one corporate entry per
    batch measurement.
    """
    options = []
    seen = set()
    by_id = {}
    for customer in customers:
        customer_id = positive_int(customer.get('id'))
        if not customer_id or customer_id in seen:
            continue
        seen.add(customer_id)
        by_id[customer_id] = customer
        options.append({
            'key': f'{customer_id}|{NO_BATCH}',
            'id': customer_id,
            'label': option_label(customer_id, customer),
            'customer_type': customer.get('customer_type'),
            'batch_measurement_id': None,
            'batch_name': None,
        })

    for order in default_orders:
        customer_id = positive_int(order.get('CustomerID'))
        if not customer_id or customer_id in seen:
            continue
        seen.add(customer_id)
        options.append({
            'key': f'{customer_id}|{NO_BATCH}',
            'id': customer_id,
            'label': f'{customer_id}-Default Customer {customer_id}',
            'customer_type': DEFAULT,
            'batch_measurement_id': None,
            'batch_name': None,
        })

    for batch in batches:
        customer_id = positive_int(batch.get('corporate_customer_id'))
        batch_id = positive_int(batch.get('id'))
        if not customer_id or not batch_id or not batch.get('batch_name'):
            continue
        customer = by_id.get(customer_id) or {}
        company = customer.get('company_name') or batch.get('corporate_customer_name') or 'Unknown Company'
        options.append({
            'key': f'{customer_id}|{batch_id}',
            'id': customer_id,
            'label': f"{customer_id}-{company} ({batch['batch_name']})",
            'customer_type': 'corporate',
            'batch_measurement_id': batch_id,
            'batch_name': batch['batch_name'],
        })
    return options


def parse_selection(selection):
    """``"12|none"`` -> (12, None); ``"12|7"`` -> (12, 7); anything unparsable -> (None, None)"""
    customer_part, _, batch_part = str(selection or '').partition('|')
    customer_id = positive_int(customer_part) or None
    batch_id = None if batch_part in ('', NO_BATCH) else (positive_int(batch_part) or None)
    return customer_id, batch_id


def find_option(options, customer_id, batch_id):
    for option in options:
        if option['id'] == customer_id and option['batch_measurement_id'] == batch_id:
            return option
    return None


def orders_for_selection(orders, options, selection):
    """Merged orders the selected customer entry may book an appointment for"""
    if not selection:
        return list(orders)
    customer_id, batch_id = parse_selection(selection)
    option = find_option(options, customer_id, batch_id)
    if option is None:
        return []

    customer_orders = [order for order in orders if order['customer_id'] == customer_id]
    customer_type = option['customer_type']
    if customer_type == DEFAULT:
        return [order for order in customer_orders if order['order_type'] in (BULK_DEFAULT, SINGLE)]
    if customer_type == 'corporate' and option['batch_measurement_id']:
        return [
            order for order in customer_orders
            if order['order_type'] != BULK_CUSTOM or order.get('bulk_id') == str(option['batch_measurement_id'])
        ]
    return customer_orders


def appointment_matches(appointment, query):
    query = query.lower()
    values = (
        appointment.get('customer_name'),
        appointment.get('order_number'),
        appointment.get('id'),
        appointment.get('appointment_date'),
        appointment.get('appointment_time'),
    )
    return any(query in str(value).lower() for value in values if value is not None)


def filter_appointments(appointments, appointment_type=None, tab=None, date=None, query='', today=None):
    """Screen filters: type, the today/view tabs and the search box"""
    results = list(appointments)
    if appointment_type in ('fitting', 'pickup'):
        results = [a for a in results if a.get('appointment_type') == appointment_type]
    if tab == TODAY_TAB and today:
        results = [a for a in results if a.get('appointment_date') == today]
    elif tab == VIEW_TAB and date:
        results = [a for a in results if a.get('appointment_date') == date]
    query = (query or '').strip()
    if query:
        results = [a for a in results if appointment_matches(a, query)]
    return results
