from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .permissions import ADMIN_DASHBOARD, PERMISSIONS, SUPER_ADMIN_DASHBOARD, section_flags

NAVIGATION = {
    ADMIN_DASHBOARD: [
        ('Customers', 'customer'),
        ('Products', 'product'),
        ('Measurements', 'measurement'),
        ('Orders', 'order'),
        ('Appointments', 'appointment'),
        ('Cashbook', 'cashbook'),
    ],
    SUPER_ADMIN_DASHBOARD: [
        ('Customers', 'customer'),
        ('Products', 'product'),
        ('Measurements', 'measurement'),
        ('Orders', 'order'),
        ('Appointments', 'appointment'),
        ('Users', 'users'),
    ],
}


def navigation(dashboard):
    return [
        {'label': label, 'path': f'/{dashboard}/{slug}/'}
        for label, slug in NAVIGATION.get(dashboard, [])
    ]


@api_view(['GET'])
@permission_classes([AllowAny])
def dashboard_home(request, dashboard):
    """Validated user, sidebar items and the permission matrix of a dashboard"""
    return Response({
        'success': True,
        'dashboard': dashboard,
        'user': getattr(request, 'backoffice_user', None),
        'navigation': navigation(dashboard),
        'permissions': {
            section: section_flags(dashboard, section)
            for section in PERMISSIONS.get(dashboard, {})
        },
        'logout': '/auth/logout/',
    })
