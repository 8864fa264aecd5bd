import pytest
from fastapi.testclient import TestClient

from darkhorse import services
from darkhorse.api.main import app
from darkhorse.api.routes import get_store
from darkhorse.chat import GREETING
from darkhorse.config import settings
from darkhorse.db.store import MemoryStore


@pytest.fixture
def client(monkeypatch):
    store = MemoryStore()
    monkeypatch.setattr(settings, 'generation_delay', 0)
    monkeypatch.setattr(settings, 'api_key', None)
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_generate_then_locked(client):
    r = client.post('/generate')
    assert r.status_code == 200
    body = r.json()
    assert [len(row) for row in body['generation']['result']] == [4, 4, 4, 4, 4, 4, 3]
    assert body['speech'] == [services.SAY_START, services.SAY_DONE]
    assert client.post('/generate').status_code == 409
    state = client.get('/state').json()
    assert state['locked'] is True and state['pending'] is False


def test_actual_unlocks(client):
    client.post('/generate')
    generated = client.get('/state').json()['generated_result']
    values = [''.join(map(str, row)) for row in generated]
    r = client.post('/actual', json={'values': values})
    assert r.status_code == 200
    assert len(r.json()['hits']) == 7
    assert client.get('/state').json()['locked'] is False
    assert client.post('/generate').status_code == 200


def test_validation_and_missing_items(client):
    assert client.put('/settings', json={'entropy': 2}).status_code == 422
    assert client.put('/settings', json={'entropy': 0.2}).json()['entropy'] == 0.2
    assert client.post('/actual', json={'values': ['1234']}).status_code == 422
    assert client.delete('/hits/3').status_code == 404
    r = client.post('/hits', json={'value': '1234', 'type': 'Milhar', 'position': 1})
    assert r.json()['status'] == 'Exact'
    assert client.delete('/hits').json() == {'removed': 1}


def test_auth(client, monkeypatch):
    monkeypatch.setattr(settings, 'api_key', 'secret')
    assert client.post('/generate').status_code == 401
    assert client.post('/generate', headers={'X-API-Key': 'secret'}).status_code == 200


def test_chat_opening_turn(client):
    r = client.get('/chat')
    assert r.json() == [{'role': 'model', 'text': GREETING}]
