import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from backoffice.dashboards.permissions import for_section, section_flags

from .api_client import UpstreamClient, relay_cookies
from .resources import SessionResource, UserResource, count_users_by_role, filter_users, landing_path
from .responses import error_response, result_response, validation_error_response
from .serializers import LoginSerializer, PublicSignupSerializer, UserCreateSerializer, UserUpdateSerializer

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def home(request):
    """Public landing document"""
    return Response({
        'success': True,
        'name': 'Tailoring back-office',
        'login': settings.LOGIN_PATH,
        'signup': '/auth/signup/',
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def unauthorized(request):
    """Where the role guard sends users that opened the other role's dashboard"""
    return Response({
        'success': False,
        'error': 'You do not have access to this dashboard.',
        'login': settings.LOGIN_PATH,
    }, status=status.HTTP_403_FORBIDDEN)


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def login(request):
    """
    GET reports whether the forwarded cookie already holds a valid session
    (and where that role lands); POST signs in upstream and relays the
    session cookies.
    """
    client = UpstreamClient.from_request(request)
    session = SessionResource(client)

    if request.method == 'GET':
        result = session.me()
        if result['success'] and isinstance(result['data'], dict):
            path = landing_path(result['data'].get('role'))
            if path:
                return Response({'success': True, 'data': result['data'], 'redirect': path})
        return Response({'success': False})

    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)

    result = session.login(**serializer.validated_data)
    if not result['success']:
        return error_response(result['error'], result['status'])

    user = result['data'] if isinstance(result['data'], dict) else {}
    path = landing_path(user.get('role'))
    if path is None:
        logger.warning(f"Login returned unknown role {user.get('role')!r}")
        response = error_response('Unknown user type', status.HTTP_400_BAD_REQUEST)
    else:
        response = Response({'success': True, 'data': user, 'redirect': path})
    return relay_cookies(client.last_response, response)


@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    """Public account registration"""
    serializer = PublicSignupSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response(serializer.errors)

    client = UpstreamClient.from_request(request)
    result = SessionResource(client).signup(serializer.validated_data)
    if not result['success']:
        return error_response(result['error'], result['status'])
    return Response({
        'success': True,
        'data': result['data'],
        'message': 'Signup success!',
        'redirect': settings.LOGIN_PATH,
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout(request):
    """End the upstream session; the caller always ends up on the login page"""
    client = UpstreamClient.from_request(request)
    result = SessionResource(client).logout()
    if not result['success']:
        logger.warning(f"Logout failed upstream: {result['error']}")
    response = Response({'success': True, 'redirect': settings.LOGIN_PATH})
    return relay_cookies(client.last_response, response)


# Users administration
@api_view(['GET', 'POST'])
@permission_classes([for_section('users')])
def user_list_create(request, dashboard):
    """List users with role and search filters or create a new user"""
    users = UserResource(UpstreamClient.from_request(request))

    if request.method == 'GET':
        result = users.list()
        if not result['success']:
            return result_response(result)
        all_users = result['data']
        return Response({
            'success': True,
            'data': filter_users(
                all_users,
                role=request.query_params.get('role', 'all'),
                search=request.query_params.get('search', ''),
            ),
            'counts': count_users_by_role(all_users),
            'permissions': section_flags(dashboard, 'users'),
        })
    else:
        serializer = UserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        result = users.create(serializer.validated_data)
        username = serializer.validated_data['username']
        if result['success']:
            result['message'] = f'User "{username}" has been created successfully.'
        return result_response(result, status.HTTP_201_CREATED)


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([for_section('users')])
def user_detail(request, dashboard, user_id):
    """Update or delete a user"""
    users = UserResource(UpstreamClient.from_request(request))

    if request.method in ('PUT', 'PATCH'):
        serializer = UserUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)
        result = users.update(user_id, serializer.validated_data)
        if result['success']:
            result['message'] = 'User has been updated successfully.'
        return result_response(result)
    else:  # DELETE
        result = users.delete(user_id)
        if result['success']:
            result['message'] = 'User has been deleted successfully.'
        return result_response(result)
