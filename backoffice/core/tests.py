"""
Test suite for the core app
Tests: upstream client, role guard, login/signup/logout, users administration, settings
"""
import requests
from django.conf import settings
from django.db import connections
from django.test import SimpleTestCase
from rest_framework import status

from backoffice.core.api_client import UpstreamClient, extract_error_message, unwrap_payload
from backoffice.core.test_utils import AuthenticatedAPIClient, FakeUpstream, TestDataFactory


class UpstreamClientTests(SimpleTestCase):
    """Test result dicts produced by the upstream client"""

    def setUp(self):
        self.upstream = FakeUpstream(role=None).install(self)
        self.client_api = UpstreamClient(base_url='http://upstream', cookie='session=abc')

    def test_success_unwraps_data(self):
        self.upstream.add('GET', '/customer', {'data': [{'id': 1}]})
        result = self.client_api.get('/customer')
        self.assertTrue(result['success'])
        self.assertEqual(result['data'], [{'id': 1}])

    def test_get_is_memoised(self):
        self.upstream.add('GET', '/customer', [])
        self.client_api.get('/customer')
        self.client_api.get('/customer')
        self.assertEqual(len(self.upstream.calls_to('GET', '/customer')), 1)

    def test_write_clears_memo(self):
        self.upstream.add('GET', '/customer', [])
        self.upstream.add('POST', '/customer/individual', {'id': 3})
        self.client_api.get('/customer')
        self.client_api.post('/customer/individual', {'customer_name': 'A'})
        self.client_api.get('/customer')
        self.assertEqual(len(self.upstream.calls_to('GET', '/customer')), 2)

    def test_error_detail_list_is_joined(self):
        self.upstream.add('POST', '/product', {'detail': [{'msg': 'field required'}, {'msg': 'bad price'}]}, status=422)
        result = self.client_api.post('/product', {})
        self.assertFalse(result['success'])
        self.assertEqual(result['error'], 'field required, bad price')
        self.assertEqual(result['status'], 422)

    def test_connection_error(self):
        self.upstream.add('GET', '/customer', requests.ConnectionError('refused'))
        result = self.client_api.get('/customer')
        self.assertEqual(result, {'success': False, 'error': 'Connection error', 'status': 502})

    def test_empty_success_body(self):
        self.upstream.add('DELETE', '/product/1', None, status=204)
        result = self.client_api.delete('/product/1')
        self.assertTrue(result['success'])
        self.assertIsNone(result['data'])

    def test_cookie_is_forwarded(self):
        self.assertEqual(self.client_api.session.headers['Cookie'], 'session=abc')

    def test_empty_params_are_dropped(self):
        self.upstream.add('GET', '/product', [])
        self.client_api.get('/product', params={'category_name': '', 'min_price': None, 'search': 'shirt'})
        self.assertEqual(self.upstream.calls[0]['params'], {'search': 'shirt'})

    def test_extract_error_message_order(self):
        self.assertEqual(extract_error_message({'detail': 'Nope', 'message': 'x'}, 'd'), 'Nope')
        self.assertEqual(extract_error_message({'message': 'Bad'}, 'd'), 'Bad')
        self.assertEqual(extract_error_message({'error': 'Broken'}, 'd'), 'Broken')
        self.assertEqual(extract_error_message({}, 'd'), 'd')

    def test_unwrap_payload_custom_key(self):
        self.assertEqual(unwrap_payload({'products': [1]}, 'products'), [1])
        self.assertEqual(unwrap_payload([1, 2]), [1, 2])


class RoleGuardTests(SimpleTestCase):
    """Test the role guard middleware"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()

    def test_public_paths_skip_validation(self):
        upstream = FakeUpstream(role=None).install(self)
        response = self.client.get('/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(upstream.calls, [])

    def test_invalid_session_redirects_to_login(self):
        FakeUpstream(role=None).install(self).add('GET', '/user/me', {'detail': 'Not authenticated'}, status=401)
        response = self.client.get('/admin_dashboard/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/auth/login/')

    def test_unreachable_upstream_redirects_to_login(self):
        FakeUpstream(role=None).install(self).add('GET', '/user/me', requests.ConnectionError('down'))
        response = self.client.get('/super_admin_dashboard/')
        self.assertEqual(response['Location'], '/auth/login/')

    def test_wrong_role_redirects_to_unauthorized(self):
        FakeUpstream(role='admin').install(self)
        response = self.client.get('/super_admin_dashboard/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/unauthorized/')

    def test_superadmin_cannot_open_admin_dashboard(self):
        FakeUpstream(role='superadmin').install(self)
        response = self.client.get('/admin_dashboard/customer/')
        self.assertEqual(response['Location'], '/unauthorized/')

    def test_matching_role_passes(self):
        FakeUpstream(role='admin').install(self)
        response = self.client.get('/admin_dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['role'], 'admin')

    def test_cookie_forwarded_to_user_me(self):
        upstream = FakeUpstream(role='admin').install(self)
        self.client.get('/admin_dashboard/')
        self.assertEqual(upstream.calls[0]['path'], '/user/me')


class AuthViewTests(SimpleTestCase):
    """Test login, signup and logout"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.upstream = FakeUpstream(role=None).install(self)

    def test_login_requires_email_and_password(self):
        response = self.client.post('/auth/login/', {'email': '', 'password': ''})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Email is required.')

    def test_login_success_routes_by_role(self):
        self.upstream.add(
            'POST', '/user/login',
            {'success': True, 'data': TestDataFactory.user('superadmin')},
            headers={'Set-Cookie': 'session=xyz; Path=/; HttpOnly'},
        )
        response = self.client.post('/auth/login/', {'email': ' boss@test.com ', 'password': 'secret1'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redirect'], '/super_admin_dashboard/customer/')
        self.assertEqual(response.cookies['session'].value, 'xyz')
        self.assertEqual(self.upstream.calls[0]['json']['email'], 'boss@test.com')

    def test_login_rejected_credentials(self):
        self.upstream.add('POST', '/user/login', {'detail': 'Wrong password'}, status=401)
        response = self.client.post('/auth/login/', {'email': 'a@test.com', 'password': 'bad'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid credentials')

    def test_login_unknown_role(self):
        self.upstream.add('POST', '/user/login', {'data': {'role': 'tailor'}})
        response = self.client.post('/auth/login/', {'email': 'a@test.com', 'password': 'secret1'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Unknown user type')

    def test_login_get_with_valid_session(self):
        self.upstream.add('GET', '/user/me', {'data': TestDataFactory.user('admin')})
        response = self.client.get('/auth/login/')
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['redirect'], '/admin_dashboard/customer/')

    def test_login_get_without_session(self):
        response = self.client.get('/auth/login/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['success'])

    def test_signup_validation(self):
        response = self.client.post('/auth/signup/', {
            'username': 'A', 'email': 'a@test.com', 'password': 'abc123', 'role': 'admin', 'agree': True,
        })
        self.assertEqual(response.data['error'], 'Name must be at least 2 characters.')

        response = self.client.post('/auth/signup/', {
            'username': 'Anna', 'email': 'a@test.com', 'password': 'abcdef', 'role': 'admin', 'agree': True,
        })
        self.assertEqual(response.data['error'],
                         'Password must be at least 6 characters, include a letter and a number.')

    def test_signup_requires_agreement(self):
        response = self.client.post('/auth/signup/', {
            'username': 'Anna', 'email': 'a@test.com', 'password': 'abc123', 'role': 'admin',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'You must agree to the Terms and Privacy Policy.')

    def test_signup_success(self):
        self.upstream.add('POST', '/user/signup', {'user': {'id': 5, 'username': 'Anna'}})
        response = self.client.post('/auth/signup/', {
            'username': 'Anna', 'email': 'a@test.com', 'password': 'abc123', 'role': 'admin', 'agree': True,
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn('agree', self.upstream.calls[0]['json'])

    def test_logout_always_lands_on_login(self):
        self.upstream.add('POST', '/user/logout', requests.ConnectionError('down'))
        response = self.client.post('/auth/logout/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redirect'], '/auth/login/')


class UserAdministrationTests(SimpleTestCase):
    """Test the users screen of the super admin dashboard"""

    def setUp(self):
        self.client = AuthenticatedAPIClient().authenticate_session()
        self.upstream = FakeUpstream(role='superadmin').install(self)
        self.upstream.add('GET', '/user/users', {'data': [
            {'id': 1, 'username': 'alice', 'email': 'alice@test.com', 'role': 'admin'},
            {'id': 2, 'username': 'bob', 'email': 'bob@shop.com', 'role': 'superadmin'},
            {'id': 3, 'username': 'carol', 'email': 'carol@shop.com', 'role': 'admin'},
        ]})

    def test_list_counts_and_filters(self):
        response = self.client.get('/super_admin_dashboard/users/?role=admin&search=SHOP')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['id'] for u in response.data['data']], [3])
        self.assertEqual(response.data['counts'], {'all': 3, 'admin': 2, 'superadmin': 1})

    def test_create_defaults_role_to_admin(self):
        self.upstream.add('POST', '/user/signup', {'user': {'id': 4}})
        response = self.client.post('/super_admin_dashboard/users/', {
            'username': 'dave', 'email': 'dave@test.com', 'password': 'pass123',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.upstream.calls_to('POST', '/user/signup')[0]['json']['role'], 'admin')

    def test_update_without_password(self):
        self.upstream.add('PUT', '/user/users/2', {'data': {'id': 2}})
        response = self.client.put('/super_admin_dashboard/users/2/', {
            'username': 'bobby', 'email': 'bob@shop.com', 'password': '',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('password', self.upstream.calls_to('PUT', '/user/users/2')[0]['json'])

    def test_delete_failure_keeps_upstream_status(self):
        self.upstream.add('DELETE', '/user/users/2', {'message': 'Cannot delete yourself'}, status=409)
        response = self.client.delete('/super_admin_dashboard/users/2/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Cannot delete yourself')

    def test_admin_dashboard_has_no_users_section(self):
        FakeUpstream(role='admin').install(self)
        response = self.client.get('/admin_dashboard/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SettingsTests(SimpleTestCase):
    """The back-office keeps no local data and no local users"""

    def test_no_local_database(self):
        self.assertEqual(connections.settings['default']['ENGINE'], 'django.db.backends.dummy')

    def test_no_local_user_apps(self):
        self.assertNotIn('django.contrib.auth', settings.INSTALLED_APPS)
        self.assertNotIn('django.contrib.contenttypes', settings.INSTALLED_APPS)
        self.assertEqual(settings.REST_FRAMEWORK['DEFAULT_AUTHENTICATION_CLASSES'], [])
