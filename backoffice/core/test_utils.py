"""
Test utilities: canned upstream responses and an API client with a session cookie
"""
import json
from unittest import mock
from urllib.parse import urlsplit

import requests
from django.core.cache import cache
from rest_framework.test import APIClient


def make_response(body=None, status=200, headers=None):
    """Build a requests.Response the way the upstream API would answer"""
    response = requests.Response()
    response.status_code = status
    if body is None:
        response._content = b''
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode('utf-8')
    else:
        response._content = json.dumps(body).encode('utf-8')
    response.encoding = 'utf-8'
    response.headers.update(headers or {})
    return response


class TestDataFactory:
    """Upstream payloads used across the app test suites"""

    @staticmethod
    def user(role='admin', user_id=1):
        return {'id': user_id, 'username': f'{role}_user', 'email': f'{role}@test.com', 'role': role}

    @staticmethod
    def individual_customer(customer_id=1, name='Jane Doe', **extra):
        data = {
            'id': customer_id,
            'customer_type': 'individual',
            'customer_name': name,
            'email': f'customer{customer_id}@test.com',
            'phone_number': f'07000{customer_id:05d}',
            'delivery_address': '1 High Street',
            'special_notes': None,
        }
        data.update(extra)
        return data

    @staticmethod
    def corporate_customer(customer_id=2, company='Acme Ltd', **extra):
        data = {
            'id': customer_id,
            'customer_type': 'corporate',
            'company_name': company,
            'contact_person': 'John Smith',
            'email': f'corp{customer_id}@test.com',
            'phone_number': f'07100{customer_id:05d}',
            'delivery_address': '2 Park Lane',
            'special_notes': None,
        }
        data.update(extra)
        return data

    @staticmethod
    def product(product_id=1, category='Shirt', price=25.0, customer_id=None, **extra):
        data = {
            'id': product_id,
            'category_name': category,
            'base_price': price,
            'description': f'{category} description',
            'style_option': 'Classic',
            'comments': '',
            'customer_id': customer_id,
        }
        data.update(extra)
        return data

    @staticmethod
    def corporate_measurement(batch_id=10, customer_id=2, product_id=1, batch_name='Batch A', **extra):
        data = {
            'id': batch_id,
            'corporate_customer_id': customer_id,
            'corporate_customer_name': 'Acme Ltd',
            'product_id': product_id,
            'product_name': 'Shirt',
            'batch_name': batch_name,
            'no_of_employees': 1,
            'employees': [],
            'created_at': '2024-01-01T10:00:00',
        }
        data.update(extra)
        return data


class FakeUpstream:
    """
    Stand-in for the upstream API, patched over ``requests.Session.request``.

    Routes are keyed by method and URL path (trailing slashes ignored); a route
    body may be an exception instance, which is raised instead of answered,
    or a callable receiving the recorded call and returning the body.
    Unrouted calls answer 404.
    """

    def __init__(self, role='admin'):
        self.routes = {}
        self.calls = []
        if role:
            self.add('GET', '/user/me', {'success': True, 'data': TestDataFactory.user(role)})

    @staticmethod
    def _key(method, path):
        return method.upper(), '/' + path.strip('/')

    def add(self, method, path, body=None, status=200, headers=None):
        self.routes[self._key(method, path)] = (body, status, headers)
        return self

    def __call__(self, method, url, params=None, json=None, **kwargs):
        path = urlsplit(url).path
        self.calls.append({'method': method.upper(), 'path': path, 'params': params, 'json': json})
        route = self.routes.get(self._key(method, path))
        if route is None:
            return make_response({'detail': 'Not Found'}, status=404)
        body, status, headers = route
        if callable(body):
            body = body(self.calls[-1])
        if isinstance(body, Exception):
            raise body
        return make_response(body, status=status, headers=headers)

    def calls_to(self, method, path):
        key = self._key(method, path)
        return [call for call in self.calls if self._key(call['method'], call['path']) == key]

    def install(self, testcase):
        """Patch requests for the duration of one test"""
        patcher = mock.patch.object(requests.Session, 'request', side_effect=self)
        patcher.start()
        testcase.addCleanup(patcher.stop)
        cache.clear()
        return self


class AuthenticatedAPIClient(APIClient):
    """APIClient carrying an upstream session cookie"""

    def authenticate_session(self, token='test-session'):
        self.cookies['session'] = token
        return self

    def logout(self):
        self.cookies.clear()
