ORDER_CONFIRMED = 'order_confirmed'
FABRIC_READY = 'fabric_ready'
CUTTING = 'cutting'
STITCHING = 'stitching'
FITTING = 'fitting'
READY_FOR_PICKUP = 'ready_for_pickup'
COMPLETED = 'completed'

ORDER_STATUS_CHOICES = [
    (ORDER_CONFIRMED, 'Order Confirmed'),
    (FABRIC_READY, 'Fabric Ready'),
    (CUTTING, 'Cutting'),
    (STITCHING, 'Stitching'),
    (FITTING, 'Fitting'),
    (READY_FOR_PICKUP, 'Ready for Pickup'),
    (COMPLETED, 'Completed'),
]

# Order kinds, in the order the merged list shows them
SINGLE = 'single'
BULK_CUSTOM = 'bulk-custom'
BULK_DEFAULT = 'bulk-default'
ORDER_KINDS = (SINGLE, BULK_CUSTOM, BULK_DEFAULT)

# Merged order ids are "<prefix>-<order_id>"; order numbers "<label>-<order_id>"
ORDER_ID_PREFIXES = {
    SINGLE: 'S',
    BULK_CUSTOM: 'BC',
    BULK_DEFAULT: 'BD',
}

ORDER_NUMBER_LABELS = {
    SINGLE: 'Individual',
    BULK_CUSTOM: 'Corporate',
    BULK_DEFAULT: 'Default',
}

# Sizes offered on the bulk default order form
ORDER_SIZES = ['XXS', 'XS', 'S', 'M', 'L', 'XL', 'XXL']
