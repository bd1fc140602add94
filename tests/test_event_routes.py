from barangay_api.extensions import db
from barangay_api.models import CustomField, Event
from barangay_api.models.enums import UserRole
from barangay_api.services import RegistrationService


def test_events_are_public(client, event):
    res = client.get("/api/events")
    assert res.status_code == 200
    assert [e["title"] for e in res.get_json()["data"]] == ["Barangay Fun Run"]

    res = client.get(f"/api/events/{event.id}")
    assert res.get_json()["data"]["registration_count"] == 0

    assert client.get("/api/events/unknown").status_code == 404


def test_create_event(client, admin_headers):
    res = client.post(
        "/api/events",
        json={
            "title": "Clean-up Drive",
            "startDate": "2026-11-01T07:00:00Z",
            "endDate": "2026-11-01T11:00:00Z",
            "capacity": 50,
        },
        headers=admin_headers,
    )
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["capacity"] == 50
    assert data["start_date"].startswith("2026-11-01T07:00:00")


def test_create_event_validation(client, admin_headers):
    res = client.post("/api/events", json={"title": "No date"}, headers=admin_headers)
    assert res.get_json()["missing_fields"] == ["startDate"]

    res = client.post(
        "/api/events",
        json={"title": "Backwards", "startDate": "2026-11-02T00:00:00Z", "endDate": "2026-11-01T00:00:00Z"},
        headers=admin_headers,
    )
    assert res.status_code == 400

    res = client.post(
        "/api/events",
        json={"title": "Zero", "startDate": "2026-11-02T00:00:00Z", "capacity": 0},
        headers=admin_headers,
    )
    assert res.status_code == 400


def test_assign_manager(client, event, make_user, admin_headers):
    manager = make_user(UserRole.EVENT_MANAGER)
    staff = make_user(UserRole.STAFF)
    url = f"/api/events/{event.id}/manager"

    res = client.put(url, json={"userId": staff.id}, headers=admin_headers)
    assert res.status_code == 400

    res = client.put(url, json={"userId": manager.id}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()["data"]["manager_id"] == manager.id


def test_capacity_must_be_a_real_integer(client, admin_headers):
    for capacity in (True, "10", 2.5, -1):
        res = client.post(
            "/api/events",
            json={"title": "Bool", "startDate": "2026-11-02T00:00:00Z", "capacity": capacity},
            headers=admin_headers,
        )
        assert res.status_code == 400
        assert res.get_json()["error"] == "capacity must be a positive integer"
    assert Event.query.count() == 0


def test_update_event(client, event, admin_headers):
    res = client.put(
        f"/api/events/{event.id}",
        json={"title": "Barangay Night Run", "capacity": 100, "location": None},
        headers=admin_headers,
    )
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["title"] == "Barangay Night Run"
    assert data["capacity"] == 100
    assert data["location"] is None
    assert data["start_date"] is not None


def test_update_event_validation(client, event, admin_headers):
    url = f"/api/events/{event.id}"
    bad_bodies = [
        {"title": ""},
        {"capacity": True},
        {"startDate": "someday"},
        {"endDate": "2000-01-01T00:00:00Z"},
    ]
    for body in bad_bodies:
        res = client.put(url, json=body, headers=admin_headers)
        assert res.status_code == 400

    assert db.session.get(Event, event.id).title == "Barangay Fun Run"
    assert client.put("/api/events/unknown", json={}, headers=admin_headers).status_code == 404


def test_capacity_cannot_drop_below_registrations(client, event, admin_headers):
    for name in ("Ana", "Ben"):
        RegistrationService.create_registration({"eventId": event.id, "firstName": name})

    res = client.put(f"/api/events/{event.id}", json={"capacity": 1}, headers=admin_headers)
    assert res.status_code == 409

    res = client.put(f"/api/events/{event.id}", json={"capacity": 2}, headers=admin_headers)
    assert res.status_code == 200


def test_managers_only_update_their_own_events(client, event, make_user, auth_headers):
    manager = make_user(UserRole.EVENT_MANAGER)
    headers = auth_headers(manager)
    url = f"/api/events/{event.id}"

    assert client.put(url, json={"title": "Mine"}, headers=headers).status_code == 403

    event.manager_id = manager.id
    db.session.commit()
    assert client.put(url, json={"title": "Mine"}, headers=headers).status_code == 200

    staff_headers = auth_headers(make_user(UserRole.STAFF))
    assert client.put(url, json={"title": "Ours"}, headers=staff_headers).status_code == 403


def test_delete_event(client, event, admin_headers):
    db.session.add(CustomField(event_id=event.id, name="shirtSize"))
    db.session.commit()

    res = client.delete(f"/api/events/{event.id}", headers=admin_headers)
    assert res.status_code == 200
    assert Event.query.count() == 0
    assert CustomField.query.count() == 0


def test_event_with_registrations_cannot_be_deleted(client, registration, admin_headers, make_user, auth_headers):
    url = f"/api/events/{registration.event_id}"

    manager_headers = auth_headers(make_user(UserRole.EVENT_MANAGER))
    assert client.delete(url, headers=manager_headers).status_code == 403

    res = client.delete(url, headers=admin_headers)
    assert res.status_code == 409
    assert Event.query.count() == 1
