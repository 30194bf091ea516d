from django.urls import path
from .views import (
    order_list, order_form_options, bulk_id_list,
    single_order_list_create, single_order_detail,
    bulk_custom_order_list_create, bulk_custom_order_detail, bulk_custom_order_by_bulk_id,
    bulk_default_order_list_create, bulk_default_order_detail,
)

urlpatterns = [
    path('', order_list, name='order-list'),
    path('options/', order_form_options, name='order-form-options'),
    path('bulk-ids/', bulk_id_list, name='bulk-id-list'),

    # Single order endpoints
    path('single/', single_order_list_create, name='single-order-list-create'),
    path('single/<int:pk>/', single_order_detail, name='single-order-detail'),

    # Bulk custom order endpoints
    path('bulk-custom/', bulk_custom_order_list_create, name='bulk-custom-order-list-create'),
    path('bulk-custom/<int:pk>/', bulk_custom_order_detail, name='bulk-custom-order-detail'),
    path('bulk-custom/by-bulkid/<int:bulk_id>/', bulk_custom_order_by_bulk_id, name='bulk-custom-order-by-bulk-id'),

    # Bulk default order endpoints
    path('bulk-default/', bulk_default_order_list_create, name='bulk-default-order-list-create'),
    path('bulk-default/<int:pk>/', bulk_default_order_detail, name='bulk-default-order-detail'),
]
