"""
Screen filters for products, measurement fields and product measurements
"""


def _contains(value, query):
    return query in str(value if value is not None else '').lower()


def filter_products(products, query=''):
    """Search over category, description, style option and price"""
    query = (query or '').strip().lower()
    if not query:
        return list(products)
    return [
        product for product in products
        if any(_contains(product.get(key), query)
               for key in ('category_name', 'description', 'style_option', 'base_price'))
    ]


def is_default_product(product):
    """Products without an owning customer are offered to everyone"""
    return product.get('customer_id') in (None, '', 0, '0')


def same_id(left, right):
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()


def product_sort_name(product):
    return str(product.get('category_name') or product.get('name') or product.get('product_name') or '')


def products_for_customer(products, customer_id, customer_type, measurements):
    """
    Products a customer can be measured for.

    Keeps default products, products the customer already has a measurement
    for and products assigned to the customer. Default products come first,
    then the customer's own, each group ordered by name.
    """
    owner_key = 'customer_id' if customer_type == 'individual' else 'corporate_customer_id'
    measured_ids = {
        str(m.get('product_id'))
        for m in measurements or []
        if same_id(m.get(owner_key), customer_id)
    }

    def belongs_to_customer(product):
        return same_id(product.get('customer_id'), customer_id)

    kept = [
        product for product in products
        if is_default_product(product)
        or str(product.get('id')) in measured_ids
        or belongs_to_customer(product)
    ]
    return sorted(kept, key=lambda p: (
        0 if is_default_product(p) else 1,
        0 if belongs_to_customer(p) else 1,
        product_sort_name(p).lower(),
    ))


def product_names(products):
    """Product id (as string) -> category name"""
    return {str(p.get('id')): p.get('category_name') or p.get('name') for p in products}


def filter_field_groups(groups, names, query=''):
    """Search over product name and each field's name, type and unit"""
    query = (query or '').strip().lower()
    if not query:
        return list(groups)
    matched = []
    for group in groups:
        product_name = names.get(str(group.get('product_id'))) or ''
        if _contains(product_name, query) or any(
            _contains(field.get(key), query)
            for field in group.get('measurement_fields') or []
            for key in ('field_name', 'field_type', 'unit')
        ):
            matched.append(group)
    return matched


def filter_product_measurements(measurements, query=''):
    """Search over product name (case-insensitive) and product id"""
    query = (query or '').strip()
    if not query:
        return list(measurements)
    return [
        m for m in measurements
        if _contains(m.get('product_name'), query.lower()) or query in str(m.get('product_id'))
    ]
