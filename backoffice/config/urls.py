"""
URL configuration for the tailoring back-office.

Both dashboards mount the same screens; the ``dashboard`` kwarg selects the
permission matrix the views check.
"""
from django.urls import path, include, re_path
from django.views.generic import RedirectView

from backoffice.core.views import home, unauthorized
from backoffice.dashboards.permissions import ADMIN_DASHBOARD, SUPER_ADMIN_DASHBOARD

urlpatterns = [
    path('', home, name='home'),
    path('auth/', include('backoffice.core.urls')),
    path('unauthorized/', unauthorized, name='unauthorized'),
    path(
        'admin_dashboard/',
        include(('backoffice.dashboards.urls', 'dashboards'), namespace=ADMIN_DASHBOARD),
        {'dashboard': ADMIN_DASHBOARD},
    ),
    path(
        'super_admin_dashboard/',
        include(('backoffice.dashboards.urls', 'dashboards'), namespace=SUPER_ADMIN_DASHBOARD),
        {'dashboard': SUPER_ADMIN_DASHBOARD},
    ),
    # Older bookmarks
    re_path(r'^admin/(?P<rest>.*)$', RedirectView.as_view(url='/admin_dashboard/%(rest)s')),
    re_path(r'^super-admin/(?P<rest>.*)$', RedirectView.as_view(url='/super_admin_dashboard/%(rest)s')),
]
