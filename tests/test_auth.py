from uuid import uuid4
from fastapi.testclient import TestClient
from memories_api.db.init_db import init_db
from memories_api.main import app
from memories_api.services import auth_service


def test_register_login_refresh():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        r = client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        assert r.status_code == 201
        assert r.json()['email'] == email
        assert r.json()['isActive'] is True

        login = client.post('/auth/login', json={'email': email, 'password': 'secret123'})
        assert login.status_code == 200
        assert login.json()['tokenType'] == 'bearer'
        refresh_token = login.json()['refreshToken']

        refresh = client.post('/auth/refresh', json={'refreshToken': refresh_token})
        assert refresh.status_code == 200
        assert refresh.json()['refreshToken'] != refresh_token


def test_refresh_token_is_single_use():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        refresh_token = client.post(
            '/auth/login', json={'email': email, 'password': 'secret123'}
        ).json()['refreshToken']

        assert client.post('/auth/refresh', json={'refreshToken': refresh_token}).status_code == 200
        reused = client.post('/auth/refresh', json={'refreshToken': refresh_token})
        assert reused.status_code == 401
        assert reused.json()['message'] == 'Refresh token revoked'


def test_logout_revokes_refresh_token():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        refresh_token = client.post(
            '/auth/login', json={'email': email, 'password': 'secret123'}
        ).json()['refreshToken']

        logout = client.post('/auth/logout', json={'refresh_token': refresh_token})
        assert logout.status_code == 200

        refresh = client.post('/auth/refresh', json={'refreshToken': refresh_token})
        assert refresh.status_code == 401


def test_access_token_cannot_refresh():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        access_token = client.post(
            '/auth/login', json={'email': email, 'password': 'secret123'}
        ).json()['accessToken']

        refresh = client.post('/auth/refresh', json={'refreshToken': access_token})
        assert refresh.status_code == 401
        assert refresh.json()['message'] == 'Invalid token type'


def test_register_rejects_duplicate_email():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        again = client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        assert again.status_code == 400
        assert again.json()['message'] == 'Email already registered'


def test_login_rejects_unknown_account():
    init_db(drop_all=True)
    with TestClient(app) as client:
        response = client.post('/auth/login', json={'email': 'missing@b.com', 'password': 'secret123'})
        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid email or password'


def test_login_rejects_wrong_password():
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        response = client.post('/auth/login', json={'email': email, 'password': 'wrongpass'})
        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid email or password'


def test_health_is_public():
    with TestClient(app) as client:
        response = client.get('/health')
        assert response.status_code == 200
        assert response.json() == {'status': 'ok'}


def test_register_race_on_unique_email_is_a_conflict(monkeypatch):
    init_db(drop_all=True)
    with TestClient(app) as client:
        email = f"{uuid4()}@b.com"
        client.post('/auth/register', json={'email': email, 'password': 'secret123'})
        # the pre-check misses the row, as when two registrations interleave
        monkeypatch.setattr(auth_service, 'get_user_by_email', lambda *_args: None)

        again = client.post('/auth/register', json={'email': email, 'password': 'secret123'})

        assert again.status_code == 400
        assert again.json()['message'] == 'Email already registered'
