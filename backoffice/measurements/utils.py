"""
Measurement shaping and screen search
"""


def flatten_value(measurement):
    """``{value: ...}`` objects collapse to their value"""
    if isinstance(measurement, dict) and 'value' in measurement:
        return measurement['value']
    return measurement


def flatten_measurements(measurements):
    """
    Stored measurements as ``{field_id: value}`` for the edit form.

    Accepts a list of ``{field_id, value}`` rows or a mapping whose values
    may be ``{value: ...}`` objects.
    """
    if isinstance(measurements, list):
        return {str(row.get('field_id')): row.get('value') for row in measurements if isinstance(row, dict)}
    if isinstance(measurements, dict):
        return {str(field_id): flatten_value(value) for field_id, value in measurements.items()}
    return {}


def individual_for_edit(measurement):
    item = dict(measurement)
    item['measurements'] = flatten_measurements(measurement.get('measurements'))
    return item


def corporate_for_edit(measurement):
    item = dict(measurement)
    item['employees'] = [
        dict(employee, measurements=flatten_measurements(employee.get('measurements')))
        for employee in measurement.get('employees') or []
    ]
    return item


def _text_match(value, query):
    return query.lower() in str(value or '').lower()


def _id_match(value, query):
    return value is not None and query in str(value)


def filter_individual_measurements(measurements, query=''):
    """Search over customer name, product name and the ids"""
    query = (query or '').strip()
    if not query:
        return list(measurements)
    return [
        m for m in measurements
        if _text_match(m.get('customer_name'), query)
        or _text_match(m.get('product_name'), query)
        or any(_id_match(m.get(key), query) for key in ('customer_id', 'product_id', 'id'))
    ]


def filter_corporate_measurements(measurements, query=''):
    """Search over customer, product and batch names and the ids"""
    query = (query or '').strip()
    if not query:
        return list(measurements)
    return [
        m for m in measurements
        if any(_text_match(m.get(key), query) for key in ('customer_name', 'product_name', 'batch_name'))
        or any(_id_match(m.get(key), query) for key in ('corporate_customer_id', 'product_id', 'id'))
    ]
