"""
Client for the upstream tailoring API.

One client is bound to one incoming request: the browser's session cookie is
forwarded on every call, and GET responses are memoised for the lifetime of
the client so a single screen never fetches the same list twice.

Every call returns a plain result dict:

    {'success': True, 'data': ..., 'message': ..., 'status': 200}
    {'success': False, 'error': '...', 'status': 404}
"""
import json
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

CONNECTION_ERROR = 'Connection error'
CONNECTION_ERROR_STATUS = 502


def ok(data=None, message=None, status=200):
    """Build a successful result"""
    result = {'success': True, 'data': data, 'status': status}
    if message:
        result['message'] = message
    return result


def fail(error, status=400):
    """Build a failed result"""
    return {'success': False, 'error': error, 'status': status}


def clean_params(params):
    """Drop query parameters that carry no value"""
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None or value == '':
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        cleaned[key] = value
    return cleaned or None


def unwrap_payload(body, *keys):
    """
    Return the list or object inside an upstream envelope.

    The upstream API answers either with the bare payload or with
    ``{"data": ...}``; some list endpoints use their own key instead.
    """
    if not isinstance(body, dict):
        return body
    for key in ('data',) + keys:
        if key in body and body[key] is not None:
            return body[key]
    return body


def extract_error_message(body, default):
    """Pick the most specific error message from an upstream error body"""
    if isinstance(body, str):
        return body.strip() or default
    if not isinstance(body, dict):
        return default

    detail = body.get('detail')
    if detail:
        if isinstance(detail, list):
            # Validation errors: [{"loc": [...], "msg": "...", ...}]
            parts = []
            for item in detail:
                if isinstance(item, dict):
                    parts.append(item.get('msg') or item.get('message') or json.dumps(item))
                else:
                    parts.append(str(item))
            return ', '.join(parts) or default
        if isinstance(detail, str):
            return detail
        return json.dumps(detail)
    if body.get('message'):
        return str(body['message'])
    if body.get('error'):
        return str(body['error'])
    return default


def parse_body(response):
    """Decode a response body; empty bodies become None, non-JSON stays text"""
    text = response.text or ''
    if not text.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return text


def upstream_set_cookie_headers(response):
    """All Set-Cookie header values of an upstream response"""
    raw_headers = getattr(getattr(response, 'raw', None), 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'getlist'):
        return raw_headers.getlist('Set-Cookie')
    value = response.headers.get('Set-Cookie')
    return [value] if value else []


def relay_cookies(upstream_response, response):
    """Copy upstream Set-Cookie headers onto an outgoing Django response"""
    if upstream_response is None:
        return response
    for header in upstream_set_cookie_headers(upstream_response):
        response.cookies.load(header)
    return response


class UpstreamClient:
    """requests-based client forwarding the caller's cookie to the upstream API"""

    def __init__(self, base_url=None, cookie='', timeout=None):
        self.base_url = (base_url or settings.UPSTREAM_API_URL).rstrip('/')
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT
        self.cookie = cookie or ''
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })
        if self.cookie:
            self.session.headers['Cookie'] = self.cookie
        self._memo = {}
        self.last_response = None

    @classmethod
    def from_request(cls, request):
        """Client bound to the cookie of an incoming Django/DRF request"""
        existing = getattr(request, 'upstream_client', None)
        if existing is not None:
            return existing
        client = cls(cookie=request.META.get('HTTP_COOKIE', ''))
        try:
            request.upstream_client = client
        except AttributeError:
            pass
        return client

    def url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def send(self, method, path, params=None, payload=None):
        """Perform the HTTP call; returns the requests.Response or raises RequestException"""
        response = self.session.request(
            method,
            self.url(path),
            params=clean_params(params),
            json=payload,
            timeout=self.timeout,
        )
        self.last_response = response
        return response

    def call(self, method, path, params=None, payload=None, default_error='Request failed', unwrap_keys=()):
        """Call the upstream API and fold the outcome into a result dict"""
        method = method.upper()
        try:
            response = self.send(method, path, params=params, payload=payload)
        except requests.RequestException as e:
            logger.error(f"Upstream {method} {path} failed: {e}")
            return fail(CONNECTION_ERROR, CONNECTION_ERROR_STATUS)

        body = parse_body(response)
        if not response.ok:
            message = extract_error_message(body, default_error)
            logger.warning(f"Upstream {method} {path} returned {response.status_code}: {message}")
            result = fail(message, response.status_code)
            result['body'] = body
            return result

        message = body.get('message') if isinstance(body, dict) else None
        if isinstance(body, dict) and body.get('success') is False:
            # Some endpoints report failure in the body with a 200 status
            return fail(message or body.get('error') or default_error, 400)
        return ok(unwrap_payload(body, *unwrap_keys), message=message, status=response.status_code)

    def get(self, path, params=None, default_error='Failed to load data', unwrap_keys=()):
        """Memoised GET; repeated lookups within one request hit the upstream once"""
        key = (path, tuple(sorted((clean_params(params) or {}).items())), tuple(unwrap_keys))
        if key in self._memo:
            return self._memo[key]
        result = self.call('GET', path, params=params, default_error=default_error, unwrap_keys=unwrap_keys)
        if result['success']:
            self._memo[key] = result
        return result

    def post(self, path, payload=None, default_error='Request failed', unwrap_keys=()):
        self._memo.clear()
        return self.call('POST', path, payload=payload, default_error=default_error, unwrap_keys=unwrap_keys)

    def put(self, path, payload=None, default_error='Request failed', unwrap_keys=()):
        self._memo.clear()
        return self.call('PUT', path, payload=payload, default_error=default_error, unwrap_keys=unwrap_keys)

    def delete(self, path, default_error='Request failed'):
        self._memo.clear()
        return self.call('DELETE', path, default_error=default_error)
