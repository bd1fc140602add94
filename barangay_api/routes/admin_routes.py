from flask import Blueprint
from barangay_api.models.enums import UserRole
from barangay_api.repositories import EventRepository, RegistrationRepository
from barangay_api.services import RegistrationService, UserService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/admin/dashboard", methods=["GET"])
@roles_required(UserRole.SUPER_ADMIN)
def dashboard_summary():
    return success_response(
        {
            "totalEvents": EventRepository.count_all(),
            "totalRegistrations": RegistrationRepository.count_all(),
        }
    )


@admin_bp.route("/admin/purge", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN)
def purge_data():
    data = json_body()
    result = RegistrationService.purge(data.get("confirm"))
    return success_response(result, message="Purge completed")


@admin_bp.route("/admin/revoked-tokens/cleanup", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN)
def cleanup_revoked_tokens():
    num_deleted = UserService.cleanup_expired_revocations()
    return success_response({"deleted": num_deleted})
