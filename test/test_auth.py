"""
Test cases for authentication functionality.
"""
import pytest

from conftest import PASSWORD
from quizhub.auth.utils import hash_password, is_valid_email, validate_password, verify_password


def register(client, **overrides):
    body = {'name': 'New User', 'email': 'new@test.com', 'password': 'secret123'}
    body.update(overrides)
    return client.post('/api/auth/register', json=body)


class TestRegister:
    """Test cases for user registration."""

    def test_register_defaults_to_teacher(self, client):
        """Test a user without an explicit role becomes a teacher."""
        response = register(client)
        assert response.status_code == 201
        data = response.get_json()
        assert data['success'] is True
        assert data['data']['role'] == 'teacher'
        assert 'password_hash' not in data['data']

    def test_register_logs_in(self, client):
        """Test the new user is logged in right away."""
        register(client, role='student')
        response = client.get('/api/auth/me')
        assert response.status_code == 200
        assert response.get_json()['data']['role'] == 'student'

    def test_email_normalized(self, client):
        """Test emails are stored trimmed and lower-cased."""
        response = register(client, email='  Mixed@Test.COM ')
        assert response.get_json()['data']['email'] == 'mixed@test.com'

    def test_duplicate_email(self, client, teacher):
        """Test registering an existing email fails."""
        response = register(client, email=teacher.email)
        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'message': 'User with this email already exists'}

    @pytest.mark.parametrize('overrides', [
        {'name': ''},
        {'email': 'not-an-email'},
        {'password': '123'},
        {'role': 'admin'},
    ])
    def test_invalid_input(self, client, overrides):
        """Test invalid registration data is rejected."""
        response = register(client, **overrides)
        assert response.status_code == 400
        assert response.get_json()['success'] is False


class TestLogin:
    """Test cases for login and logout."""

    def test_login_success(self, client, teacher):
        """Test valid credentials log the user in."""
        response = client.post('/api/auth/login', json={'email': teacher.email, 'password': PASSWORD})
        assert response.status_code == 200
        assert response.get_json()['data']['id'] == teacher.id
        assert client.get('/api/auth/me').status_code == 200

    def test_wrong_password(self, client, teacher):
        """Test a wrong password is rejected."""
        response = client.post('/api/auth/login', json={'email': teacher.email, 'password': 'wrong-one'})
        assert response.status_code == 401
        assert response.get_json() == {'success': False, 'message': 'Invalid credentials'}

    def test_unknown_email(self, client):
        """Test an unknown email gets the same answer as a wrong password."""
        response = client.post('/api/auth/login', json={'email': 'ghost@test.com', 'password': 'whatever'})
        assert response.status_code == 401

    def test_missing_fields(self, client):
        """Test login without credentials."""
        response = client.post('/api/auth/login', json={})
        assert response.status_code == 400

    def test_logout(self, teacher_client):
        """Test logout ends the session."""
        assert teacher_client.post('/api/auth/logout').status_code == 200
        assert teacher_client.get('/api/auth/me').status_code == 401

    def test_me_requires_login(self, client):
        """Test the current-user endpoint needs a session."""
        response = client.get('/api/auth/me')
        assert response.status_code == 401
        assert response.get_json()['success'] is False


class TestLoginRateLimit:
    """Test cases for login throttling."""

    def test_blocks_after_limit(self, app, client, teacher):
        """Test the login endpoint answers 429 once the limit is reached."""
        app.config['RATE_LIMIT_ENABLED'] = True
        app.config['LOGIN_RATE_LIMIT'] = 2
        body = {'email': teacher.email, 'password': 'wrong-one'}

        assert client.post('/api/auth/login', json=body).status_code == 401
        assert client.post('/api/auth/login', json=body).status_code == 401
        response = client.post('/api/auth/login', json=body)

        assert response.status_code == 429
        assert response.headers['Retry-After'] == str(app.config['LOGIN_RATE_WINDOW_SECONDS'])
        assert response.get_json()['success'] is False

    def test_disabled(self, client):
        """Test throttling is off when disabled in config."""
        body = {'email': 'ghost@test.com', 'password': 'wrong-one'}
        for _ in range(12):
            assert client.post('/api/auth/login', json=body).status_code == 401


class TestAuthUtils:
    """Test cases for password and email helpers."""

    def test_hash_and_verify(self):
        """Test a hashed password verifies and a wrong one does not."""
        hashed = hash_password('correct horse')
        assert hashed != 'correct horse'
        assert verify_password('correct horse', hashed)
        assert not verify_password('battery staple', hashed)

    def test_long_password_truncated(self):
        """Test passwords are compared on their first 72 bytes."""
        hashed = hash_password('a' * 72 + 'tail')
        assert verify_password('a' * 72 + 'other', hashed)

    def test_validate_password(self):
        """Test the minimum length check."""
        assert validate_password('abc', 6) == (False, 'Password must be at least 6 characters long')
        assert validate_password('abcdef', 6) == (True, None)

    @pytest.mark.parametrize('email,valid', [
        ('user@example.com', True),
        ('user@example', False),
        ('no at sign', False),
        ('', False),
    ])
    def test_is_valid_email(self, email, valid):
        """Test email format check."""
        assert is_valid_email(email) is valid


class TestStringFields:
    """Test cases for non-string credentials in request bodies."""

    @pytest.mark.parametrize('overrides', [
        {'role': 5},
        {'name': 123},
        {'email': ['new@test.com']},
        {'password': 12345678},
    ])
    def test_register_rejects_non_strings(self, client, overrides):
        """Test non-string registration fields answer 400, not 500."""
        response = register(client, **overrides)
        assert response.status_code == 400
        assert response.get_json()['success'] is False
        assert 'must be a string' in response.get_json()['message']

    def test_login_rejects_non_strings(self, client):
        """Test a non-string email on login answers 400."""
        response = client.post('/api/auth/login', json={'email': 5, 'password': 'whatever'})
        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'message': 'Email must be a string'}


class TestSessionIsolation:
    """Test cases for several logged-in clients in one test."""

    def test_each_client_keeps_its_user(self, teacher_client, other_teacher_client, teacher, other_teacher):
        """Test two clients logged in as different users are told apart."""
        first = teacher_client.get('/api/auth/me').get_json()['data']['email']
        second = other_teacher_client.get('/api/auth/me').get_json()['data']['email']
        again = teacher_client.get('/api/auth/me').get_json()['data']['email']

        assert (first, second, again) == (teacher.email, other_teacher.email, teacher.email)
