from django.urls import path
from .views import (
    product_list_create, product_detail,
    measurement_field_list_create, measurement_field_product, measurement_field_detail,
    product_measurement_list_create, product_measurement_detail,
    product_measurement_fields, product_measurement_by_size,
)

urlpatterns = [
    # Product endpoints
    path('product/', product_list_create, name='product-list-create'),
    path('product/<int:pk>/', product_detail, name='product-detail'),

    # Measurement field endpoints
    path('measurement-field/', measurement_field_list_create, name='measurement-field-list-create'),
    path('measurement-field/product/<int:product_id>/', measurement_field_product, name='measurement-field-product'),
    path('measurement-field/<int:pk>/', measurement_field_detail, name='measurement-field-detail'),

    # Product (size) measurement endpoints
    path('product-measurement/', product_measurement_list_create, name='product-measurement-list-create'),
    path('product-measurement/<int:pk>/', product_measurement_detail, name='product-measurement-detail'),
    path('product-measurement/fields/<int:product_id>/', product_measurement_fields, name='product-measurement-fields'),
    path('product-measurement/product/<int:product_id>/size/<str:size>/', product_measurement_by_size,
         name='product-measurement-by-size'),
]
