"""Meeting aggregate CRUD and the creator/participant write rules."""
from conftest import auth
from models import db, Invitation, Meeting, Task


def _action_point(**overrides):
    data = {'description': 'Draft agenda', 'assignedTo': 'alice@example.com', 'dueDate': '2030-01-20T09:00:00'}
    data.update(overrides)
    return data


def test_create_meeting_sets_creator(client, register, create_meeting):
    alice = register('alice@example.com')

    meeting = create_meeting(alice['token'], title='  Kickoff  ', createdBy=999)

    assert meeting['createdBy'] == alice['_id']
    assert meeting['title'] == 'Kickoff'
    assert meeting['participants'] == []


def test_create_meeting_validates_input(client, register, meeting_data):
    alice = register('alice@example.com')

    missing = dict(meeting_data)
    del missing['venue']
    response = client.post('/api/meetings', json=missing, headers=auth(alice['token']))
    assert response.status_code == 400
    assert 'venue' in response.get_json()['error']

    too_long = dict(meeting_data, title='x' * 51)
    assert client.post('/api/meetings', json=too_long, headers=auth(alice['token'])).status_code == 400


def test_meetings_require_token(client):
    response = client.get('/api/meetings')
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'error': 'Not authorized to access this route'}


def test_read_requires_creator_or_participant(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    eve = register('eve@example.com')
    meeting = create_meeting(alice['token'])
    invite(alice['token'], meeting['_id'], 'bob@example.com')

    assert client.get(f"/api/meetings/{meeting['_id']}", headers=auth(alice['token'])).status_code == 200
    assert client.get(f"/api/meetings/{meeting['_id']}", headers=auth(bob['token'])).status_code == 200
    assert client.get(f"/api/meetings/{meeting['_id']}", headers=auth(eve['token'])).status_code == 403
    assert client.get('/api/meetings/4242', headers=auth(alice['token'])).status_code == 404


def test_list_is_created_then_participating_without_duplicates(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    own = create_meeting(alice['token'], title='Own')
    invite(alice['token'], own['_id'], 'alice@example.com')
    other = create_meeting(bob['token'], title='Bobs')
    invite(bob['token'], other['_id'], 'alice@example.com')
    create_meeting(bob['token'], title='Private')

    body = client.get('/api/meetings', headers=auth(alice['token'])).get_json()

    assert body['count'] == 2
    assert [m['title'] for m in body['data']] == ['Own', 'Bobs']


def test_creator_can_update_all_fields(client, register, create_meeting):
    alice = register('alice@example.com')
    meeting = create_meeting(alice['token'])

    response = client.put(f"/api/meetings/{meeting['_id']}",
                          json={'title': 'Renamed', 'venue': 'Online', 'actionPoints': [_action_point()]},
                          headers=auth(alice['token']))

    data = response.get_json()['data']
    assert response.status_code == 200
    assert data['title'] == 'Renamed'
    assert data['venue'] == 'Online'
    assert len(data['actionPoints']) == 1


def test_participant_update_only_changes_action_points(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'])
    invite(alice['token'], meeting['_id'], 'bob@example.com')

    response = client.put(f"/api/meetings/{meeting['_id']}",
                          json={'title': 'new', 'actionPoints': [_action_point(assignedTo=None)]},
                          headers=auth(bob['token']))

    data = response.get_json()['data']
    assert response.status_code == 200
    assert data['title'] == 'Sprint planning'
    assert data['actionPoints'][0]['assignedTo'] == 'bob@example.com'


def test_stranger_cannot_update(client, register, create_meeting):
    alice = register('alice@example.com')
    eve = register('eve@example.com')
    meeting = create_meeting(alice['token'])

    response = client.put(f"/api/meetings/{meeting['_id']}", json={'title': 'hijack'},
                          headers=auth(eve['token']))

    assert response.status_code == 403


def test_created_by_cannot_change(client, register, create_meeting):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'])

    response = client.put(f"/api/meetings/{meeting['_id']}", json={'createdBy': bob['_id']},
                          headers=auth(alice['token']))
    assert response.status_code == 400

    # Re-sending the current owner is harmless
    response = client.put(f"/api/meetings/{meeting['_id']}", json={'createdBy': alice['_id'], 'venue': 'B'},
                          headers=auth(alice['token']))
    assert response.status_code == 200
    assert response.get_json()['data']['createdBy'] == alice['_id']


def test_update_participants_keeps_statuses_and_invites_new(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    meeting = create_meeting(alice['token'])
    token = invite(alice['token'], meeting['_id'], 'bob@example.com', 'carol@example.com')[0]['token']
    client.put(f'/api/invite/{token}/status', json={'status': 'accepted'})

    response = client.put(f"/api/meetings/{meeting['_id']}", json={'participants': [
        {'name': 'Bobby', 'email': 'bob@example.com', 'role': 'organizer'},
        {'name': 'Dan', 'email': 'dan@example.com'},
    ]}, headers=auth(alice['token']))

    participants = {p['email']: p for p in response.get_json()['data']['participants']}
    assert set(participants) == {'bob@example.com', 'dan@example.com'}
    assert participants['bob@example.com']['status'] == 'accepted'
    assert participants['bob@example.com']['name'] == 'Bobby'
    assert participants['dan@example.com']['status'] == 'invited'

    invitations = client.get(f"/api/meetings/{meeting['_id']}/invitations", headers=auth(alice['token']))
    assert 'dan@example.com' in {i['email'] for i in invitations.get_json()['data']}


def test_delete_is_creator_only_and_cascades(app, client, register, admin, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'])
    invite(alice['token'], meeting['_id'], 'bob@example.com')
    client.post(f"/api/meetings/{meeting['_id']}/tasks", json={
        'title': 'Slides', 'assignedToEmail': 'bob@example.com'
    }, headers=auth(admin['token']))

    assert client.delete(f"/api/meetings/{meeting['_id']}", headers=auth(bob['token'])).status_code == 403
    assert client.delete(f"/api/meetings/{meeting['_id']}", headers=auth(alice['token'])).status_code == 200

    with app.app_context():
        assert db.session.get(Meeting, meeting['_id']) is None
        assert Invitation.query.count() == 0
        assert Task.query.count() == 0


def test_participant_adds_action_point_assigned_to_self(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'])
    invite(alice['token'], meeting['_id'], 'bob@example.com')

    response = client.post(f"/api/meetings/{meeting['_id']}/action-points",
                           json={'description': 'Book room', 'dueDate': '2030-01-10T00:00:00'},
                           headers=auth(bob['token']))

    assert response.status_code == 201
    assert response.get_json()['data']['actionPoints'][0]['assignedTo'] == 'bob@example.com'


def test_creator_must_name_assignee(client, register, create_meeting):
    alice = register('alice@example.com')
    meeting = create_meeting(alice['token'])

    response = client.post(f"/api/meetings/{meeting['_id']}/action-points",
                           json={'description': 'Book room', 'dueDate': '2030-01-10T00:00:00'},
                           headers=auth(alice['token']))

    assert response.status_code == 400


def test_action_point_status_update_and_edit(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    meeting = create_meeting(alice['token'], actionPoints=[_action_point()])
    invite(alice['token'], meeting['_id'], 'bob@example.com')
    action_id = meeting['actionPoints'][0]['_id']
    url = f"/api/meetings/{meeting['_id']}/action-points/{action_id}"

    response = client.put(url, json={'status': 'in-progress'}, headers=auth(bob['token']))
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'in-progress'

    assert client.put(url, json={'status': 'done'}, headers=auth(bob['token'])).status_code == 400
    assert client.patch(url, json={'description': 'x'}, headers=auth(bob['token'])).status_code == 403

    response = client.patch(url, json={'description': 'Final agenda'}, headers=auth(alice['token']))
    assert response.get_json()['data']['actionPoints'][0]['description'] == 'Final agenda'

    missing = f"/api/meetings/{meeting['_id']}/action-points/999"
    assert client.put(missing, json={'status': 'completed'}, headers=auth(alice['token'])).status_code == 404


def test_action_point_delete_gated_like_other_mutations(client, register, create_meeting, invite):
    alice = register('alice@example.com')
    bob = register('bob@example.com')
    eve = register('eve@example.com')
    meeting = create_meeting(alice['token'], actionPoints=[_action_point(), _action_point(description='Two')])
    invite(alice['token'], meeting['_id'], 'bob@example.com')
    first, second = [ap['_id'] for ap in meeting['actionPoints']]

    url = f"/api/meetings/{meeting['_id']}/action-points/{first}"
    assert client.delete(url, headers=auth(eve['token'])).status_code == 403

    response = client.delete(url, headers=auth(bob['token']))
    assert response.status_code == 200
    assert [ap['_id'] for ap in response.get_json()['data']['actionPoints']] == [second]


def test_pain_points_are_admin_managed(client, register, admin, create_meeting):
    alice = register('alice@example.com')
    meeting = create_meeting(alice['token'])
    url = f"/api/meetings/{meeting['_id']}/painpoints"

    assert client.post(url, json={'description': 'Too long'}, headers=auth(alice['token'])).status_code == 403

    response = client.post(url, json={'description': 'Too long'}, headers=auth(admin['token']))
    point = response.get_json()['data']['painPoints'][0]
    assert point['status'] == 'open'
    assert point['addedBy'] == admin['_id']

    response = client.put(f"{url}/{point['_id']}", json={'status': 'resolved'}, headers=auth(admin['token']))
    assert response.get_json()['data']['painPoints'][0]['status'] == 'resolved'

    body = client.get(url, headers=auth(alice['token'])).get_json()
    assert body['count'] == 1


def test_strangers_cannot_tell_which_action_points_exist(client, register, create_meeting):
    alice = register('alice@example.com')
    eve = register('eve@example.com')
    meeting = create_meeting(alice['token'], actionPoints=[_action_point()])
    base = f"/api/meetings/{meeting['_id']}/action-points"
    existing = f"{base}/{meeting['actionPoints'][0]['_id']}"

    for url in (existing, f'{base}/999'):
        assert client.put(url, json={'status': 'completed'}, headers=auth(eve['token'])).status_code == 403
        assert client.delete(url, headers=auth(eve['token'])).status_code == 403
