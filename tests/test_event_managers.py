from barangay_api.extensions import db
from barangay_api.models import Event, User
from barangay_api.models.enums import UserRole

MANAGER = {
    "email": "manager@example.com",
    "password": "secret123",
    "firstName": "Rosa",
    "lastName": "Mendoza",
}


def create_manager(client, headers, **overrides):
    return client.post("/api/event-managers", json={**MANAGER, **overrides}, headers=headers)


def test_create_and_list_event_managers(client, admin_headers, make_user):
    make_user(UserRole.STAFF)

    res = create_manager(client, admin_headers)
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["role"] == "EVENT_MANAGER"
    assert data["profile"]["last_name"] == "Mendoza"

    res = client.get("/api/event-managers", headers=admin_headers)
    assert [m["email"] for m in res.get_json()["data"]] == ["manager@example.com"]

    assert create_manager(client, admin_headers).status_code == 409


def test_manager_accounts_can_sign_in(client, admin_headers):
    create_manager(client, admin_headers)

    res = client.post(
        "/api/auth/login", json={"email": "manager@example.com", "password": "secret123"}
    )
    assert res.status_code == 200
    assert res.get_json()["data"]["user"]["role"] == "EVENT_MANAGER"


def test_event_manager_routes_are_super_admin_only(client, make_user, auth_headers):
    manager_headers = auth_headers(make_user(UserRole.EVENT_MANAGER))

    assert client.get("/api/event-managers", headers=manager_headers).status_code == 403
    assert create_manager(client, manager_headers).status_code == 403
    assert client.get("/api/event-managers").status_code == 401


def test_update_event_manager(client, admin_headers, make_user):
    manager_id = create_manager(client, admin_headers).get_json()["data"]["id"]
    url = f"/api/event-managers/{manager_id}"

    res = client.put(
        url, json={"email": "rosa@example.com", "firstName": "Rosario"}, headers=admin_headers
    )
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["email"] == "rosa@example.com"
    assert data["profile"]["first_name"] == "Rosario"
    assert data["profile"]["last_name"] == "Mendoza"

    make_user(UserRole.STAFF, email="taken@example.com")
    assert client.put(url, json={"email": "taken@example.com"}, headers=admin_headers).status_code == 409
    assert client.put(url, json={"password": "123"}, headers=admin_headers).status_code == 400

    staff = make_user(UserRole.STAFF)
    res = client.put(f"/api/event-managers/{staff.id}", json={}, headers=admin_headers)
    assert res.status_code == 404


def test_deactivated_manager_loses_access_and_events(client, admin_headers, event):
    manager_id = create_manager(client, admin_headers).get_json()["data"]["id"]
    event.manager_id = manager_id
    db.session.commit()

    res = client.delete(f"/api/event-managers/{manager_id}", headers=admin_headers)
    assert res.status_code == 200

    assert db.session.get(User, manager_id).is_active is False
    assert db.session.get(Event, event.id).manager_id is None

    res = client.post(
        "/api/auth/login", json={"email": "manager@example.com", "password": "secret123"}
    )
    assert res.status_code == 401

    res = client.put(
        f"/api/events/{event.id}/manager", json={"userId": manager_id}, headers=admin_headers
    )
    assert res.status_code == 400
