import pytest
from barangay_api.extensions import db
from barangay_api.exceptions import MissingFieldsError, ValidationError
from barangay_api.models import CustomField, Profile, Registration
from barangay_api.models.enums import UserRole
from barangay_api.services import CustomFieldService


def add_field(client, event, headers, **body):
    return client.post(f"/api/events/{event.id}/custom-fields", json=body, headers=headers)


@pytest.fixture
def shirt_size(event):
    return CustomFieldService.create_field(
        event.id,
        {"name": "shirtSize", "type": "select", "required": True, "options": ["S", "M", "L"]},
    )


@pytest.fixture
def age(event):
    return CustomFieldService.create_field(event.id, {"name": "age", "type": "number", "sortOrder": 2})


def test_create_and_list_fields(client, event, admin_headers):
    res = add_field(client, event, admin_headers, name="birthday", type="date", sortOrder=1)
    assert res.status_code == 201
    assert res.get_json()["data"]["required"] is False

    res = add_field(
        client, event, admin_headers, name="team", type="select", required=True, options=["Red", "Blue"]
    )
    assert res.status_code == 201

    res = client.get(f"/api/events/{event.id}/custom-fields")
    assert res.status_code == 200
    fields = res.get_json()["data"]
    assert [f["name"] for f in fields] == ["team", "birthday"]
    assert fields[0]["options"] == ["Red", "Blue"]

    event_data = client.get(f"/api/events/{event.id}").get_json()["data"]
    assert len(event_data["custom_fields"]) == 2


def test_field_definition_validation(client, event, admin_headers, shirt_size):
    bad_bodies = [
        {"type": "text"},
        {"name": "color", "type": "colour"},
        {"name": "color", "type": "select"},
        {"name": "color", "type": "select", "options": []},
        {"name": "color", "type": "select", "options": [1, 2]},
        {"name": "color", "type": "text", "required": "yes"},
        {"name": "color", "type": "text", "sortOrder": True},
    ]
    for body in bad_bodies:
        assert add_field(client, event, admin_headers, **body).status_code == 400

    res = add_field(client, event, admin_headers, name="shirtSize", type="text")
    assert res.status_code == 409
    assert CustomField.query.count() == 1


def test_fields_are_managed_by_the_assigned_manager(client, event, make_user, auth_headers):
    manager = make_user(UserRole.EVENT_MANAGER)
    headers = auth_headers(manager)

    assert add_field(client, event, headers, name="notes", type="text").status_code == 403

    event.manager_id = manager.id
    db.session.commit()
    assert add_field(client, event, headers, name="notes", type="text").status_code == 201

    staff_headers = auth_headers(make_user(UserRole.STAFF))
    assert add_field(client, event, staff_headers, name="other", type="text").status_code == 403


def test_update_field(client, event, admin_headers, shirt_size):
    url = f"/api/events/{event.id}/custom-fields/{shirt_size.id}"

    res = client.put(url, json={"options": ["M", "XL"], "required": False}, headers=admin_headers)
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["options"] == ["M", "XL"]
    assert data["required"] is False

    res = client.put(url, json={"type": "text"}, headers=admin_headers)
    assert res.get_json()["data"]["options"] == []

    res = client.put(
        f"/api/events/{event.id}/custom-fields/unknown", json={}, headers=admin_headers
    )
    assert res.status_code == 404


def test_delete_field(client, event, admin_headers, shirt_size):
    url = f"/api/events/{event.id}/custom-fields/{shirt_size.id}"

    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.delete(url, headers=admin_headers).status_code == 404
    assert CustomField.query.count() == 0


def test_required_fields_must_be_answered(client, event, shirt_size, age):
    res = client.post(
        "/api/registrations",
        json={"eventId": event.id, "firstName": "Ana", "lastName": "Reyes", "contact": "0917"},
    )
    assert res.status_code == 400
    assert res.get_json()["missing_fields"] == ["shirtSize"]

    res = client.post(
        "/api/registrations",
        json={"eventId": event.id, "customValues": {"shirtSize": "  "}},
    )
    assert res.status_code == 400
    assert Registration.query.count() == 0
    assert Profile.query.count() == 0


def test_answers_are_checked_against_the_field_type(client, event, shirt_size, age):
    bad_values = [
        {"shirtSize": "XXL"},
        {"shirtSize": "M", "age": "old"},
        {"shirtSize": "M", "age": True},
    ]
    for values in bad_values:
        res = client.post("/api/registrations", json={"eventId": event.id, "customValues": values})
        assert res.status_code == 400

    res = client.post(
        "/api/registrations",
        json={"eventId": event.id, "customValues": {"shirtSize": "M", "age": "34", "extra": "kept"}},
    )
    assert res.status_code == 201
    registration = db.session.get(Registration, res.get_json()["data"]["registrationId"])
    assert registration.custom_values_dict == {"shirtSize": "M", "age": "34", "extra": "kept"}


def test_validate_values_for_text_and_date_fields(event):
    CustomFieldService.create_field(event.id, {"name": "nickname", "type": "text"})
    CustomFieldService.create_field(event.id, {"name": "birthday", "type": "date", "required": True})

    assert CustomFieldService.validate_values(event, {"birthday": "1990-05-17"})
    with pytest.raises(ValidationError):
        CustomFieldService.validate_values(event, {"birthday": "17/05/1990"})
    with pytest.raises(ValidationError):
        CustomFieldService.validate_values(event, {"birthday": "1990-05-17", "nickname": 5})
    with pytest.raises(MissingFieldsError):
        CustomFieldService.validate_values(event, {"nickname": "Jun"})
