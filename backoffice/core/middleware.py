"""
Role guard for the dashboards.

Every non-public request is validated against the upstream ``/user/me``
endpoint with the caller's cookie. Sessions that do not validate are sent to
the login page; sessions whose role does not own the dashboard are sent to
the unauthorized page.
"""
import logging

import requests
from django.conf import settings
from django.shortcuts import redirect

from backoffice.dashboards.permissions import DASHBOARD_ROLES

from .api_client import UpstreamClient, parse_body

logger = logging.getLogger(__name__)

# Dashboard path prefix -> role allowed to use it
DASHBOARD_PATH_ROLES = {f'/{dashboard}': role for dashboard, role in DASHBOARD_ROLES.items()}


def is_public_path(path):
    """Paths served without a validated session"""
    if path in settings.PUBLIC_EXACT_PATHS:
        return True
    return any(path.startswith(prefix) for prefix in settings.PUBLIC_PATH_PREFIXES)


def required_role(path):
    """Role a path is restricted to, or None when any valid session may use it"""
    for prefix, role in DASHBOARD_PATH_ROLES.items():
        if path.startswith(prefix):
            return role
    return None


def fetch_session_user(client):
    """
    Validate the forwarded session upstream.

    Returns the user dict (the ``data`` member of the upstream body) or None
    when the upstream does not answer 200.
    """
    try:
        response = client.send('GET', '/user/me')
    except requests.RequestException as e:
        logger.error(f"Session validation failed: {e}")
        return None
    if response.status_code != 200:
        return None
    body = parse_body(response)
    if not isinstance(body, dict):
        return None
    user = body.get('data')
    return user if isinstance(user, dict) else {}


class RoleGuardMiddleware:
    """Redirect requests whose upstream session is missing or has the wrong role"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path
        if is_public_path(path):
            return self.get_response(request)

        client = UpstreamClient.from_request(request)
        user = fetch_session_user(client)
        if user is None:
            logger.info(f"No valid session for {path}, redirecting to login")
            return redirect(settings.LOGIN_PATH)

        role = required_role(path)
        if role and user.get('role') != role:
            logger.warning(f"Role {user.get('role')!r} denied access to {path}")
            return redirect(settings.UNAUTHORIZED_PATH)

        request.backoffice_user = user
        return self.get_response(request)
