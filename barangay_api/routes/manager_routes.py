from flask import Blueprint
from barangay_api.models.enums import UserRole
from barangay_api.services import UserService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

manager_bp = Blueprint("manager", __name__)


@manager_bp.route("/event-managers", methods=["GET"])
@roles_required(UserRole.SUPER_ADMIN)
def list_event_managers():
    managers = UserService.list_event_managers()
    return success_response([manager.to_dict() for manager in managers])


@manager_bp.route("/event-managers", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN)
def create_event_manager():
    manager = UserService.create_event_manager(json_body())
    return success_response(manager.to_dict(), status_code=201)


@manager_bp.route("/event-managers/<string:user_id>", methods=["PUT"])
@roles_required(UserRole.SUPER_ADMIN)
def update_event_manager(user_id):
    manager = UserService.update_event_manager(user_id, json_body())
    return success_response(manager.to_dict(), message="Event Manager updated")


@manager_bp.route("/event-managers/<string:user_id>", methods=["DELETE"])
@roles_required(UserRole.SUPER_ADMIN)
def deactivate_event_manager(user_id):
    UserService.deactivate_event_manager(user_id)
    return success_response(message="Event Manager deactivated")
