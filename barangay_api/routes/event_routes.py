from flask import Blueprint
from flask_jwt_extended import get_current_user
from barangay_api.models.enums import UserRole
from barangay_api.services import CustomFieldService, EventService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

event_bp = Blueprint("event", __name__)

MANAGERS = (UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER)


@event_bp.route("/events", methods=["GET"])
def get_all_events():
    events = EventService.get_events()
    return success_response([event.to_dict() for event in events])


@event_bp.route("/events", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN)
def create_event():
    data = json_body()
    event = EventService.create_event(data)
    return success_response(event.to_dict(), status_code=201)


@event_bp.route("/events/<string:event_id>", methods=["GET"])
def get_event(event_id):
    return success_response(EventService.get_event(event_id).to_dict())


@event_bp.route("/events/<string:event_id>", methods=["PUT"])
@roles_required(*MANAGERS)
def update_event(event_id):
    event = EventService.update_event(event_id, json_body(), user=get_current_user())
    return success_response(event.to_dict(), message="Event updated")


@event_bp.route("/events/<string:event_id>", methods=["DELETE"])
@roles_required(UserRole.SUPER_ADMIN)
def delete_event(event_id):
    EventService.delete_event(event_id)
    return success_response(message="Event deleted")


@event_bp.route("/events/<string:event_id>/manager", methods=["PUT"])
@roles_required(UserRole.SUPER_ADMIN)
def assign_event_manager(event_id):
    data = json_body()
    event = EventService.assign_manager(event_id, data.get("userId"))
    return success_response(event.to_dict(), message="Manager assigned")


@event_bp.route("/events/<string:event_id>/custom-fields", methods=["GET"])
def list_custom_fields(event_id):
    fields = CustomFieldService.list_fields(event_id)
    return success_response([field.to_dict() for field in fields])


@event_bp.route("/events/<string:event_id>/custom-fields", methods=["POST"])
@roles_required(*MANAGERS)
def create_custom_field(event_id):
    field = CustomFieldService.create_field(event_id, json_body(), user=get_current_user())
    return success_response(field.to_dict(), status_code=201)


@event_bp.route("/events/<string:event_id>/custom-fields/<string:field_id>", methods=["PUT"])
@roles_required(*MANAGERS)
def update_custom_field(event_id, field_id):
    field = CustomFieldService.update_field(
        event_id, field_id, json_body(), user=get_current_user()
    )
    return success_response(field.to_dict(), message="Custom field updated")


@event_bp.route("/events/<string:event_id>/custom-fields/<string:field_id>", methods=["DELETE"])
@roles_required(*MANAGERS)
def delete_custom_field(event_id, field_id):
    CustomFieldService.delete_field(event_id, field_id, user=get_current_user())
    return success_response(message="Custom field deleted")
