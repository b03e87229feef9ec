def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json() == {'message': 'API is running'}


def test_state_of_unknown_room(client):
    res = client.get('/api/rooms/NOPE42/state')
    assert res.status_code == 404
    data = res.get_json()
    assert data['code'] == 'room_not_found'
    assert 'error' in data


def test_state_of_live_room(client, registry):
    session = registry.create_room('alice', 'Alice')
    registry.join_room(session.room_id, 'bob', 'Bob')
    session.start('alice', 3, 3)

    # Lookup ignores case
    res = client.get(f'/api/rooms/{session.room_id.lower()}/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['room_id'] == session.room_id
    assert state['status'] == 'playing'
    assert state['grid'] == {'rows': 3, 'cols': 3}
    assert state['current_player_id'] == 'alice'
    assert [p['name'] for p in state['players']] == ['Alice', 'Bob']


def test_registry_is_injectable():
    from dotbox import create_app
    from dotbox.services.games import RoomRegistry
    from conftest import TestConfig

    registry = RoomRegistry()
    app = create_app(TestConfig, registry=registry)
    assert app.extensions['room_registry'] is registry
