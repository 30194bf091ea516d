from django.urls import path
from .views import customer_list_create, customer_detail

urlpatterns = [
    # Customer endpoints
    path('customer/', customer_list_create, name='customer-list-create'),
    path('customer/<str:pk>/', customer_detail, name='customer-detail'),
]
