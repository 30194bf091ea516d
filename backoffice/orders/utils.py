"""
Order shaping: the merged order list, bulk custom enrichment and display names
"""
from .constants import BULK_CUSTOM, BULK_DEFAULT, ORDER_ID_PREFIXES, ORDER_KINDS, ORDER_NUMBER_LABELS, SINGLE

BATCH_FIELDS = {
    'customer_id': 'corporate_customer_id',
    'customer_name': 'corporate_customer_name',
    'batch_name': 'batch_name',
    'product_id': 'product_id',
    'product_name': 'product_name',
}

BULK_ID_FIELDS = (
    'batch_name', 'corporate_customer_id', 'corporate_customer_name', 'product_id', 'product_name', 'created_at',
)


def positive_int(value):
    """Integer value when it is above zero, otherwise 0"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return number if number > 0 else 0


def batch_customer_map(batches):
    """Corporate batch id (as text) -> corporate customer id"""
    return {
        str(batch['id']): batch['corporate_customer_id']
        for batch in batches
        if batch.get('id') and batch.get('corporate_customer_id')
    }


def bulk_id_options(batches):
    """Corporate measurement batches as bulk custom order choices"""
    return [dict({'id': batch.get('id')}, **{field: batch.get(field) for field in BULK_ID_FIELDS})
            for batch in batches]


def enrich_bulk_custom(orders, batches):
    """
    Add customer, batch and product details of each order's batch.

    Orders whose batch is unknown keep their own values.
    """
    by_id = {str(batch.get('id')): batch for batch in batches}
    enriched = []
    for order in orders:
        batch = by_id.get(str(order.get('Bulkid')))
        item = dict(order)
        for field, batch_field in BATCH_FIELDS.items():
            if batch is not None and batch.get(batch_field) is not None:
                item[field] = batch[batch_field]
            else:
                item[field] = order.get(field)
        enriched.append(item)
    return enriched


def order_customer_id(kind, order, batch_customers):
    if kind == SINGLE:
        return positive_int(order.get('customerid'))
    if kind == BULK_CUSTOM:
        return positive_int(batch_customers.get(str(order.get('Bulkid'))))
    if kind == BULK_DEFAULT:
        return positive_int(order.get('CustomerID'))
    return 0


def merge_orders(sources, batches):
    """
    Flatten ``{kind: [orders]}`` into picker entries.

    Entries are keyed by the main order id (``order_id``), which is what
    appointments reference; orders whose customer cannot be resolved are left out.
    """
    batch_customers = batch_customer_map(batches)
    merged = []
    for kind in ORDER_KINDS:
        for order in sources.get(kind) or []:
            if not order.get('id'):
                continue
            order_id = order.get('order_id')
            customer_id = order_customer_id(kind, order, batch_customers)
            if not customer_id or not order_id:
                continue
            bulk_id = order.get('Bulkid') if kind == BULK_CUSTOM else None
            merged.append({
                'id': f'{ORDER_ID_PREFIXES[kind]}-{order_id}',
                'order_number': f'{ORDER_NUMBER_LABELS[kind]}-{order_id}',
                'customer_id': customer_id,
                'bulk_id': str(bulk_id) if bulk_id else None,
                'order_type': kind,
                'status': order.get('status'),
                'original_id': order_id,
            })
    return merged


def find_merged_order(orders, merged_id):
    for order in orders:
        if str(order['id']) == str(merged_id):
            return order
    return None


def customer_display_name(customer):
    if customer.get('customer_type') == 'corporate':
        return customer.get('company_name') or f"Corporate Customer {customer.get('id')}"
    return customer.get('customer_name') or f"Customer {customer.get('id')}"


def product_display_name(product):
    return f"{product.get('category_name')} - {product.get('base_price')}"
