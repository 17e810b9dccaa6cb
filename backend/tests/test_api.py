import random

from lobbyserver.services.lobby import start_game


def test_index_and_health(client, app_registry):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()

    app_registry.create_lobby('sid-a', 'Alice')
    res = client.get('/health')
    assert res.get_json() == {'status': 'healthy', 'lobbies': 1}


def test_list_lobbies(client, app_registry):
    res = client.get('/api/lobbies')
    assert res.status_code == 200
    assert res.get_json() == []

    lobby = app_registry.create_lobby('sid-a', 'Alice')
    data = client.get('/api/lobbies').get_json()
    assert [item['pin'] for item in data] == [lobby.pin]


def test_get_lobby_hides_every_hand(client, app_registry):
    lobby = app_registry.create_lobby('sid-a', 'Alice')
    app_registry.join_lobby(lobby.pin, 'sid-b', 'Bob')
    start_game(lobby, random.Random(11))

    res = client.get(f'/api/lobbies/{lobby.id}')
    assert res.status_code == 200
    data = res.get_json()
    assert data['started'] is True
    assert data['playerCards'] == {'sid-a': [], 'sid-b': []}
    assert data['deckCount'] == 38
    assert data['currentPlayerId'] == 'sid-a'


def test_get_lobby_not_found(client):
    res = client.get('/api/lobbies/missing')
    assert res.status_code == 404
    assert res.get_json() == {'code': 'NOT_FOUND', 'message': 'Lobby not found'}


def test_get_lobby_by_pin(client, app_registry):
    lobby = app_registry.create_lobby('sid-a', 'Alice')
    res = client.get(f'/api/lobbies/pin/{lobby.pin}')
    assert res.status_code == 200
    assert res.get_json()['id'] == lobby.id

    other = '000000' if lobby.pin != '000000' else '000001'
    assert client.get(f'/api/lobbies/pin/{other}').status_code == 404
