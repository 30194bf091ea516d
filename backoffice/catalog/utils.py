"""
Catalog helpers: garment sizes and measurement field synchronisation
"""
import logging

logger = logging.getLogger(__name__)

# Upstream size enum -> label shown on screens
SIZE_LABELS = {
    'double_extra_small': 'XXS',
    'extra_small': 'XS',
    'small': 'S',
    'medium': 'M',
    'large': 'L',
    'extra_large': 'XL',
    'double_large': 'XXL',
    'triple_extra_large': 'XXXL',
}

SIZE_CHOICES = [(value, label) for value, label in SIZE_LABELS.items()]


def format_size(size):
    """Short label of a size; unknown values are title-cased"""
    if not size:
        return ''
    return SIZE_LABELS.get(size) or str(size).replace('_', ' ').title()


def size_from_label(label):
    """Upstream enum value for a label such as ``XL``; enum values pass through"""
    if label in SIZE_LABELS:
        return label
    for value, size_label in SIZE_LABELS.items():
        if size_label == str(label).upper():
            return value
    return None


def clean_field(field):
    """Field definition as the upstream expects it"""
    return {
        'field_name': str(field.get('field_name') or '').strip(),
        'field_type': field.get('field_type'),
        'unit': str(field.get('unit') or '').strip(),
        'is_required': str(field.get('is_required')).lower(),
    }


def field_changed(submitted, existing):
    return (
        submitted.get('field_name') != existing.get('field_name')
        or submitted.get('field_type') != existing.get('field_type')
        or submitted.get('unit') != existing.get('unit')
        or str(submitted.get('is_required')).lower() != str(existing.get('is_required')).lower()
    )


def sync_measurement_fields(resource, product_id, existing_fields, submitted_fields):
    """
    Bring a product's measurement fields in line with the edited list.

    Fields are matched by position: changed positions are updated, extra
    submitted fields are bulk created and surplus existing fields deleted.
    Stops at the first failed call and returns its result.
    """
    updated = created = deleted = 0

    for existing, submitted in zip(existing_fields, submitted_fields):
        if not field_changed(submitted, existing):
            continue
        result = resource.update(existing['id'], clean_field(submitted))
        if not result['success']:
            logger.warning(f"Field sync for product {product_id} stopped at update of {existing['id']}")
            return result
        updated += 1

    new_fields = submitted_fields[len(existing_fields):]
    if new_fields:
        result = resource.bulk_create(product_id, [clean_field(field) for field in new_fields])
        if not result['success']:
            logger.warning(f"Field sync for product {product_id} stopped at bulk create")
            return result
        created = len(new_fields)

    for existing in existing_fields[len(submitted_fields):]:
        result = resource.delete(existing['id'])
        if not result['success']:
            logger.warning(f"Field sync for product {product_id} stopped at delete of {existing['id']}")
            return result
        deleted += 1

    return {
        'success': True,
        'data': {'updated': updated, 'created': created, 'deleted': deleted},
        'status': 200,
    }
