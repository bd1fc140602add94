from flask import Blueprint, request
from flask_jwt_extended import get_current_user
from barangay_api.models.enums import UserRole
from barangay_api.services import RegistrationService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

registration_bp = Blueprint("registration", __name__)

MANAGERS = (UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER)
EVENT_STAFF = (UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER, UserRole.STAFF)


@registration_bp.route("/registrations", methods=["POST"])
def create_registration():
    """Public: anyone can register for an event, optionally with a `photo` file."""
    if request.is_json:
        data = json_body()
    else:
        data = request.form.to_dict()

    result = RegistrationService.create_registration(data, request.files.get("photo"))
    return success_response(
        result,
        message="Registration created - OTP sent if phone available",
        status_code=201,
    )


@registration_bp.route("/registrations", methods=["GET"])
@roles_required(*MANAGERS)
def list_registrations():
    result = RegistrationService.list_registrations(
        page=request.args.get("page", 1),
        limit=request.args.get("limit", 50),
        status=request.args.get("status", "all"),
    )
    return success_response(result["data"], pagination=result["pagination"])


@registration_bp.route("/registrations/event/<string:event_id>", methods=["GET"])
@roles_required(*EVENT_STAFF)
def list_registrants_for_event(event_id):
    result = RegistrationService.list_registrations(
        page=request.args.get("page", 1),
        limit=request.args.get("limit", 50),
        status=request.args.get("status", "all"),
        event_id=event_id,
        user=get_current_user(),
    )
    return success_response(result["data"], pagination=result["pagination"])


@registration_bp.route("/registrations/<string:registration_id>", methods=["GET"])
@roles_required(*EVENT_STAFF)
def get_registration(registration_id):
    registration = RegistrationService.get_registration(registration_id, get_current_user())
    return success_response(registration.to_dict())


@registration_bp.route("/registrations/<string:registration_id>/approval", methods=["POST"])
@roles_required(*MANAGERS)
def approve_or_reject_registration(registration_id):
    data = json_body()
    status = data.get("status")
    registration = RegistrationService.decide(registration_id, status, get_current_user())
    return success_response(registration.to_dict(), message=f"Registration {status}")


@registration_bp.route("/registrations/<string:registration_id>/checkin", methods=["POST"])
@roles_required(*EVENT_STAFF)
def mark_checkin(registration_id):
    attendance = RegistrationService.check_in(registration_id, get_current_user())
    return success_response(attendance.to_dict(), message="Checked in")
