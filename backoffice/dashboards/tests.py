"""
Test suite for the dashboards
Tests: permission matrix, permission flags, dashboard home
"""
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream
from backoffice.dashboards.permissions import (
    ADMIN_DASHBOARD, SUPER_ADMIN_DASHBOARD, has_permission, section_flags,
)


class PermissionMatrixTests(SimpleTestCase):
    def test_admin_matrix(self):
        self.assertTrue(has_permission(ADMIN_DASHBOARD, 'customer', 'delete'))
        self.assertFalse(has_permission(ADMIN_DASHBOARD, 'product', 'create'))
        self.assertFalse(has_permission(ADMIN_DASHBOARD, 'order', 'edit'))
        self.assertFalse(has_permission(ADMIN_DASHBOARD, 'users', 'view'))

    def test_superadmin_matrix(self):
        self.assertTrue(has_permission(SUPER_ADMIN_DASHBOARD, 'order', 'delete'))
        self.assertTrue(has_permission(SUPER_ADMIN_DASHBOARD, 'appointment', 'send_reminders'))
        self.assertFalse(has_permission(SUPER_ADMIN_DASHBOARD, 'cashbook', 'view'))

    def test_flags_include_named_actions_only_when_granted(self):
        self.assertTrue(section_flags(ADMIN_DASHBOARD, 'cashbook')['can_view_summary'])
        self.assertNotIn('can_send_reminders', section_flags(ADMIN_DASHBOARD, 'appointment'))
        self.assertEqual(section_flags(ADMIN_DASHBOARD, 'measurement'), {
            'can_view': True, 'can_create': True, 'can_edit': False, 'can_delete': False,
        })

    def test_unknown_dashboard_has_nothing(self):
        self.assertFalse(has_permission('other_dashboard', 'customer', 'view'))


class DashboardHomeTests(SimpleTestCase):
    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()

    def test_admin_home(self):
        FakeUpstream(role='admin').install(self)
        response = self.client.get('/admin_dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        labels = [item['label'] for item in response.data['navigation']]
        self.assertIn('Cashbook', labels)
        self.assertNotIn('Users', labels)
        self.assertEqual(response.data['navigation'][0]['path'], '/admin_dashboard/customer/')

    def test_superadmin_home(self):
        FakeUpstream(role='superadmin').install(self)
        response = self.client.get('/super_admin_dashboard/')
        self.assertIn('users', response.data['permissions'])
        self.assertNotIn('cashbook', response.data['permissions'])
