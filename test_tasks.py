"""Tasks assigned to meeting participants."""
import pytest

from conftest import auth


@pytest.fixture
def setup(client, register, admin, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'])
    invite(alice['token'], meeting['_id'], 'bob@example.com')
    return {'alice': alice, 'bob': bob, 'admin': admin, 'meeting': meeting}


def _create_task(client, setup, **overrides):
    body = {'title': 'Prepare slides', 'assignedToEmail': 'bob@example.com', 'priority': 'high',
            'deadline': '2030-01-12T17:00:00'}
    body.update(overrides)
    return client.post(f"/api/meetings/{setup['meeting']['_id']}/tasks", json=body,
                       headers=auth(setup['admin']['token']))


def test_admin_creates_task_for_participant(client, setup):
    response = _create_task(client, setup)

    data = response.get_json()['data']
    assert response.status_code == 201
    assert data['assignedTo'] == {'_id': setup['bob']['_id'], 'email': 'bob@example.com'}
    assert data['status'] == 'pending'
    assert data['priority'] == 'high'


def test_only_admin_creates_tasks(client, setup):
    response = client.post(f"/api/meetings/{setup['meeting']['_id']}/tasks",
                           json={'title': 'x', 'assignedToEmail': 'bob@example.com'},
                           headers=auth(setup['alice']['token']))

    assert response.status_code == 403


def test_assignee_must_be_participant(client, setup, register):
    register('eve@example.com')

    response = _create_task(client, setup, assignedToEmail='eve@example.com')

    assert response.status_code == 400
    assert response.get_json()['error'] == 'User is not a participant in this meeting'


def test_unknown_assignee_or_meeting(client, setup):
    assert _create_task(client, setup, assignedToEmail='ghost@example.com').status_code == 404

    response = client.post('/api/meetings/999/tasks', json={'title': 'x', 'assignedToEmail': 'bob@example.com'},
                           headers=auth(setup['admin']['token']))
    assert response.status_code == 404


def test_list_tasks_for_members(client, setup, register):
    _create_task(client, setup)
    eve = register('eve@example.com')
    url = f"/api/meetings/{setup['meeting']['_id']}/tasks"

    assert client.get(url, headers=auth(setup['bob']['token'])).get_json()['count'] == 1
    assert client.get(url, headers=auth(setup['admin']['token'])).get_json()['count'] == 1
    assert client.get(url, headers=auth(eve['token'])).status_code == 403


def test_update_task_by_assignee_creator_or_admin(client, setup):
    task = _create_task(client, setup).get_json()['data']
    url = f"/api/tasks/{task['_id']}"

    response = client.put(url, json={'status': 'in-progress'}, headers=auth(setup['bob']['token']))
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'in-progress'

    assert client.put(url, json={'status': 'completed'}, headers=auth(setup['alice']['token'])).status_code == 403
    assert client.put(url, json={'status': 'later'}, headers=auth(setup['admin']['token'])).status_code == 400

    response = client.put(url, json={'title': 'Slides v2', 'meetingId': 42}, headers=auth(setup['admin']['token']))
    assert response.get_json()['data']['title'] == 'Slides v2'
    assert response.get_json()['data']['meetingId'] == setup['meeting']['_id']


def test_delete_task_admin_only(client, setup):
    task = _create_task(client, setup).get_json()['data']
    url = f"/api/tasks/{task['_id']}"

    assert client.delete(url, headers=auth(setup['bob']['token'])).status_code == 403
    assert client.delete(url, headers=auth(setup['admin']['token'])).status_code == 200
    assert client.put(url, json={'status': 'completed'}, headers=auth(setup['admin']['token'])).status_code == 404
