"""
Session and user administration calls of the upstream API
"""
from .api_client import fail, ok

LANDING_PATHS = {
    'admin': '/admin_dashboard/customer/',
    'superadmin': '/super_admin_dashboard/customer/',
}


def landing_path(role):
    """First screen of the dashboard a role belongs to, None for unknown roles"""
    return LANDING_PATHS.get(role)


class SessionResource:
    def __init__(self, client):
        self.client = client

    def me(self):
        return self.client.get('/user/me', default_error='Not authenticated')

    def login(self, email, password, remember=False):
        result = self.client.post('/user/login', {
            'email': email.strip(),
            'password': password,
            'remember': remember,
        }, default_error='Invalid credentials')
        if not result['success'] and result['status'] in (401, 403):
            return fail('Invalid credentials', result['status'])
        return result

    def logout(self):
        return self.client.post('/user/logout', default_error='Logout failed')

    def signup(self, data):
        return self.client.post('/user/signup', data, default_error='Signup failed', unwrap_keys=('user',))


class UserResource:
    def __init__(self, client):
        self.client = client

    def list(self):
        result = self.client.get('/user/users', default_error='Failed to load users. Please try again.')
        if result['success'] and not isinstance(result['data'], list):
            return ok([], status=result['status'])
        return result

    def create(self, data):
        return self.client.post('/user/signup', data,
                                default_error='Failed to create user. Please try again.',
                                unwrap_keys=('user',))

    def update(self, user_id, data):
        return self.client.put(f'/user/users/{user_id}', data,
                               default_error='Failed to update user. Please try again.')

    def delete(self, user_id):
        return self.client.delete(f'/user/users/{user_id}',
                                  default_error='Failed to delete user. Please try again.')


def filter_users(users, role='all', search=''):
    """Users screen filter: role tab plus case-insensitive username/email search"""
    query = (search or '').strip().lower()
    filtered = []
    for user in users:
        if role and role != 'all' and user.get('role') != role:
            continue
        if query:
            username = str(user.get('username') or '').lower()
            email = str(user.get('email') or '').lower()
            if query not in username and query not in email:
                continue
        filtered.append(user)
    return filtered


def count_users_by_role(users):
    return {
        'all': len(users),
        'admin': sum(1 for u in users if u.get('role') == 'admin'),
        'superadmin': sum(1 for u in users if u.get('role') == 'superadmin'),
    }
