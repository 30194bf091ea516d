from django.urls import include, path
from backoffice.core.views import user_list_create, user_detail
from .views import dashboard_home

# Mounted once per dashboard; the include passes the dashboard name as kwarg
urlpatterns = [
    path('', dashboard_home, name='home'),

    path('', include('backoffice.parties.urls')),
    path('', include('backoffice.catalog.urls')),
    path('measurement/', include('backoffice.measurements.urls')),
    path('order/', include('backoffice.orders.urls')),
    path('appointment/', include('backoffice.appointments.urls')),
    path('cashbook/', include('backoffice.cashbook.urls')),

    # Users endpoints (superadmin)
    path('users/', user_list_create, name='user-list-create'),
    path('users/<str:user_id>/', user_detail, name='user-detail'),
]
