import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from booksmart.database import get_db
from booksmart.main import app


@pytest.fixture
def api_client(db_engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _sign_up(api_client: TestClient) -> dict:
    response = api_client.post(
        '/auth/signup',
        json={'name': 'Ada', 'email': 'ada@example.com', 'password': 'correct horse'},
    )
    assert response.status_code == 201
    return {'Authorization': f"Bearer {response.json()['access_token']}"}


def test_root_reports_status(api_client: TestClient) -> None:
    assert api_client.get('/').json() == {'status': 'BookSmart API Running'}


@pytest.mark.parametrize('path', ['/appointments', '/bus-bookings', '/train-bookings'])
def test_booking_routes_require_session(api_client: TestClient, path: str) -> None:
    response = api_client.get(path)

    assert response.status_code in (401, 403)


def test_booking_routes_reject_unknown_token(api_client: TestClient) -> None:
    response = api_client.get('/appointments', headers={'Authorization': 'Bearer nope'})

    assert response.status_code == 401
    assert response.json() == {'detail': 'Invalid token'}


def test_appointment_flow_over_http(api_client: TestClient) -> None:
    headers = _sign_up(api_client)
    payload = {
        'name': 'Ada Lovelace',
        'email': 'ada@example.com',
        'service': 'Facial Treatment',
        'date': '2099-01-05',
        'time': '13:00',
        'notes': 'Sensitive skin',
    }

    created = api_client.post('/appointments', json=payload, headers=headers)
    duplicate = api_client.post('/appointments', json=payload, headers=headers)
    listed = api_client.get('/appointments', params={'date': '2099-01-05'}, headers=headers)

    assert created.status_code == 201
    assert created.json()['status'] == 'confirmed'
    assert duplicate.status_code == 409
    assert [item['time'] for item in listed.json()] == ['13:00']

    cancelled = api_client.delete(f"/appointments/{created.json()['id']}", headers=headers)
    assert cancelled.status_code == 204
    assert api_client.get('/appointments', headers=headers).json() == []


def test_invalid_email_is_rejected_over_http(api_client: TestClient) -> None:
    headers = _sign_up(api_client)

    response = api_client.post(
        '/appointments',
        json={'name': 'Ada', 'email': 'ada', 'service': 'Facial Treatment', 'date': '2099-01-05', 'time': '13:00'},
        headers=headers,
    )

    assert response.status_code == 422
    assert 'Please enter a valid email address' in response.text


def test_redirect_endpoint_uses_optional_session(api_client: TestClient) -> None:
    headers = _sign_up(api_client)

    anonymous = api_client.get('/auth/redirect', params={'location': '/train-booking'})
    signed_in = api_client.get('/auth/redirect', params={'location': '/login'}, headers=headers)

    assert anonymous.json() == {'redirect_to': '/login?redirect=%2Ftrain-booking'}
    assert signed_in.json() == {'redirect_to': '/'}
