"""
Pytest configuration and shared fixtures.
"""

import pytest

from app import create_app
from config import TestConfig
from models import db
from services.users import create_admin

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture
def app():
    """Fresh app with an empty in-memory database per test."""
    app = create_app(TestConfig())
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register(client):
    """Register an account and return the session payload (with token)."""
    def _register(email, password=DEFAULT_PASSWORD):
        response = client.post('/api/auth/register', json={'email': email, 'password': password})
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _register


@pytest.fixture
def admin(app, client):
    with app.app_context():
        create_admin('admin@example.com', DEFAULT_PASSWORD)
    response = client.post('/api/auth/login', json={'email': 'admin@example.com', 'password': DEFAULT_PASSWORD})
    return response.get_json()['data']


@pytest.fixture
def meeting_data():
    """Sample meeting payload."""
    return {
        'title': 'Sprint planning',
        'date': '2030-01-15T10:00:00',
        'venue': 'Room 4',
        'summary': 'Plan the next sprint',
    }


@pytest.fixture
def create_meeting(client, meeting_data):
    def _create(token, **overrides):
        body = dict(meeting_data, **overrides)
        response = client.post('/api/meetings', json=body, headers=auth(token))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _create


@pytest.fixture
def invite(client):
    """Invite people to a meeting; returns the added participants."""
    def _invite(token, meeting_id, *emails, role='viewer'):
        participants = [{'name': email.split('@')[0], 'email': email, 'role': role} for email in emails]
        response = client.post(f'/api/meetings/{meeting_id}/invitations',
                               json={'participants': participants}, headers=auth(token))
        assert response.status_code == 200, response.get_json()
        return response.get_json()['data']['addedParticipants']
    return _invite
