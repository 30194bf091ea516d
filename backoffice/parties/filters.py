"""
Customer screen filters
"""


def customer_matches(customer, search):
    """Email and name fields case-insensitive, phone number as typed"""
    if not search:
        return True
    search_lower = search.lower()
    if search_lower in str(customer.get('email') or '').lower():
        return True
    if search in str(customer.get('phone_number') or ''):
        return True
    if customer.get('customer_type') == 'corporate':
        names = (customer.get('company_name'), customer.get('contact_person'))
    else:
        names = (customer.get('customer_name'),)
    return any(search_lower in str(name or '').lower() for name in names)


def filter_customers(customers, customer_type='all', search=''):
    search = (search or '').strip()
    return [
        customer for customer in customers
        if (customer_type in (None, '', 'all') or customer.get('customer_type') == customer_type)
        and customer_matches(customer, search)
    ]


def count_customers_by_type(customers):
    return {
        'all': len(customers),
        'individual': sum(1 for c in customers if c.get('customer_type') == 'individual'),
        'corporate': sum(1 for c in customers if c.get('customer_type') == 'corporate'),
    }
