from django.urls import path
from .views import (
    measurement_list,
    individual_measurement_create, individual_measurement_detail,
    corporate_measurement_create, corporate_measurement_detail,
    measurement_customers, measurement_products, measurement_form_fields,
)

urlpatterns = [
    path('', measurement_list, name='measurement-list'),

    # Individual measurement endpoints
    path('individual/', individual_measurement_create, name='individual-measurement-create'),
    path('individual/<int:customer_id>/<int:product_id>/', individual_measurement_detail,
         name='individual-measurement-detail'),

    # Corporate measurement endpoints
    path('corporate/', corporate_measurement_create, name='corporate-measurement-create'),
    path('corporate/<int:pk>/', corporate_measurement_detail, name='corporate-measurement-detail'),

    # Form helpers
    path('customers/', measurement_customers, name='measurement-customers'),
    path('products/', measurement_products, name='measurement-products'),
    path('fields/<int:product_id>/', measurement_form_fields, name='measurement-form-fields'),
]
