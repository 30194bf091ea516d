"""
Permission matrices of the two dashboards.

The same views are mounted under ``/admin_dashboard/`` and
``/super_admin_dashboard/``; the URL include passes the dashboard name as the
``dashboard`` kwarg and ``for_section`` checks it against the matrix below.
"""
from rest_framework.permissions import BasePermission

ADMIN_DASHBOARD = 'admin_dashboard'
SUPER_ADMIN_DASHBOARD = 'super_admin_dashboard'

DASHBOARD_ROLES = {
    ADMIN_DASHBOARD: 'admin',
    SUPER_ADMIN_DASHBOARD: 'superadmin',
}

CRUD = ('view', 'create', 'edit', 'delete')

PERMISSIONS = {
    ADMIN_DASHBOARD: {
        'customer': CRUD,
        'product': ('view',),
        'measurement': ('view', 'create'),
        'measurement_field': ('view', 'create'),
        'product_measurement': ('view',),
        'order': ('view', 'create'),
        'appointment': ('view', 'create'),
        'cashbook': CRUD + ('view_summary',),
    },
    SUPER_ADMIN_DASHBOARD: {
        'customer': CRUD,
        'product': CRUD,
        'measurement': CRUD,
        'measurement_field': CRUD,
        'product_measurement': CRUD,
        'order': CRUD,
        'appointment': CRUD + ('send_reminders',),
        'users': CRUD,
    },
}

# Named actions reported as permission flags on every screen of a section
NAMED_ACTIONS = ('send_reminders', 'view_summary')

METHOD_ACTIONS = {
    'GET': 'view',
    'HEAD': 'view',
    'OPTIONS': 'view',
    'POST': 'create',
    'PUT': 'edit',
    'PATCH': 'edit',
    'DELETE': 'delete',
}


def has_permission(dashboard, section, action):
    return action in PERMISSIONS.get(dashboard, {}).get(section, ())


def section_flags(dashboard, section):
    """``can_*`` flags a screen uses to show or hide its controls"""
    flags = {f'can_{action}': has_permission(dashboard, section, action) for action in CRUD}
    for action in NAMED_ACTIONS:
        if has_permission(dashboard, section, action):
            flags[f'can_{action}'] = True
    return flags


def for_section(section, action=None):
    """
    Build a DRF permission class for one dashboard section.

    Without ``action`` the required action follows the HTTP method.
    """

    class SectionPermission(BasePermission):
        message = 'You do not have permission to perform this action.'

        def has_permission(self, request, view):
            dashboard = view.kwargs.get('dashboard')
            required = action or METHOD_ACTIONS.get(request.method)
            return bool(required) and has_permission(dashboard, section, required)

    SectionPermission.__name__ = f'{section.title().replace("_", "")}Permission'
    return SectionPermission
