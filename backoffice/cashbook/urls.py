from django.urls import path
from .resources import EXPENSE, INCOME
from .views import (
    cashbook_entry_list, cashbook_search, cashbook_summary, cashbook_entry_create, cashbook_entry_detail,
)

urlpatterns = [
    path('', cashbook_entry_list, name='cashbook-entry-list'),
    path('search/', cashbook_search, name='cashbook-search'),
    path('summary/', cashbook_summary, name='cashbook-summary'),

    # Entry endpoints
    path('income/', cashbook_entry_create, {'transaction_type': INCOME}, name='cashbook-income-create'),
    path('expense/', cashbook_entry_create, {'transaction_type': EXPENSE}, name='cashbook-expense-create'),
    path('entries/<int:pk>/', cashbook_entry_detail, name='cashbook-entry-detail'),
]
